"""HTTP service mode for respfmt."""

from .app import create_app, load_generator, run_service

__all__ = ["create_app", "load_generator", "run_service"]
