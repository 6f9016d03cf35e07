"""Translation of PostgREST failures into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from postgrest.exceptions import APIError

from macro_tracker.domain.errors import ConflictError, UnexpectedError

UNIQUE_VIOLATION = "23505"


@contextmanager
def translate_api_errors(
    action: str, conflict_message: str | None = None
) -> Iterator[None]:
    """Re-raise PostgREST API errors as typed application errors."""
    try:
        yield
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION and conflict_message:
            raise ConflictError(conflict_message) from exc
        raise UnexpectedError(f"Failed to {action}") from exc
