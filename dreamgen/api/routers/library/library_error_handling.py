"""
Library error handling utilities.

Provides a decorator for consistent error handling across history and
prompt library endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from dreamgen.core.exceptions import (
    DreamGenException,
    GenerationNotFoundError,
    GenerationValidationError,
    LibraryEntryNotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_library_errors(func: F) -> F:
    """
    Decorator to handle library errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping domain exceptions to HTTP status codes
    - Uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (LibraryEntryNotFoundError, GenerationNotFoundError) as e:
            logger.warning("Resource not found", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except PermissionDeniedError as e:
            logger.warning("Permission denied", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)

        except (GenerationValidationError, ValueError) as e:
            logger.warning("Invalid library request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False),
            )

        except DreamGenException as e:
            logger.error("Library operation failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in library operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred during library operation: {str(e)}",
            )

    return wrapper  # type: ignore
