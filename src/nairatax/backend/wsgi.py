"""WSGI entrypoint for deploying the NairaTax backend."""

from nairatax.backend.app import create_app

application = create_app()
