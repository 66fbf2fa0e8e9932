"""
Library router package.

Exports the router for prompt library endpoints and the shared
error-handling decorator.
"""

from .library_error_handling import handle_library_errors
from .library_router import router

__all__ = ["handle_library_errors", "router"]
