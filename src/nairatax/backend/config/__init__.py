"""Engine configuration loading and validation."""
