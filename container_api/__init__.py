"""Container Control API: create, inspect and remove Docker containers over HTTP."""

__version__ = "1.0.0"
