"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, logging, database handle, field
mapping), ``schemas`` (Pydantic models), ``services`` (data access
for each collection) and ``api`` (HTTP routes).
"""

from .main import app  # noqa: F401
