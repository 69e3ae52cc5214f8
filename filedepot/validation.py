"""Argument checks run before any request is sent."""

from collections.abc import Sequence


def require_non_blank(value: str | None, param_name: str) -> None:
    """Raise ValueError if value is None, not a string, or whitespace only."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{param_name} must not be null or blank")


def require_max_length(value: str | None, max_length: int, param_name: str) -> None:
    """Raise ValueError if value is longer than max_length. None is allowed."""
    if value is not None and len(value) > max_length:
        raise ValueError(f"{param_name} must not exceed {max_length} characters")


def require_non_empty_ids(ids: Sequence[str] | None, param_name: str) -> None:
    """Raise ValueError if ids is None, empty, or holds a blank element.

    A bare string is rejected as well, since iterating it would yield
    single characters instead of ids.
    """
    if ids is None or isinstance(ids, str) or len(ids) == 0:
        raise ValueError(f"{param_name} must not be null or empty")
    for i, file_id in enumerate(ids):
        if not isinstance(file_id, str) or not file_id.strip():
            raise ValueError(f"{param_name}[{i}] must not be null or blank")
