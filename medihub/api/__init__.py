"""HTTP API for the MediHub translation layer."""

from medihub.api.app import app

__all__ = ["app"]
