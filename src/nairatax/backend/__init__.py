"""Backend services for the NairaTax calculator."""
