"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, database access and
error types), ``schemas`` (request payloads and serialization),
``services`` (business logic) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
