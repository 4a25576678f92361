"""Field normalisation: scalar coercion, URL validation, and alias resolution.

Every function here is pure and maps an optional raw JSON value to an
optional canonical value; ``None`` means the field is absent.
"""

from typing import Any, Callable, Optional, Tuple


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> Optional[str]:
    # bool is a subclass of int; booleans are handled by the last attempt.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _as_float(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, float) else None


def _as_bool(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "true" if value else "false"
    return None


_STRING_COERCIONS: Tuple[Callable[[Any], Optional[str]], ...] = (
    _as_str,
    _as_int,
    _as_float,
    _as_bool,
)


def coerce_string(value: Any) -> Optional[str]:
    """Return *value* as a string, trying str, int, float and bool in that order.

    Objects, arrays and ``None`` yield ``None``.
    """
    for attempt in _STRING_COERCIONS:
        result = attempt(value)
        if result is not None:
            return result
    return None


def normalize_url(value: Any) -> Optional[str]:
    """Coerce *value* to a usable asset/link URL, or ``None``.

    The coerced string must be non-empty and start with ``http``; anything
    else (``"42"``, ``"true"``, ``"/relative"``) is treated as absent.

    >>> normalize_url("https://images.example.com/a.png")
    'https://images.example.com/a.png'
    >>> normalize_url(42) is None
    True
    """
    text = coerce_string(value)
    if text is None:
        return None
    text = text.strip()
    if not text or not text.startswith("http"):
        return None
    return text


def normalize_text(value: Any) -> Optional[str]:
    return coerce_string(value)


def normalize_identity(value: Any) -> Optional[str]:
    """Return a non-empty entry ID, or ``None``."""
    text = coerce_string(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


def normalize_flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def pick(*candidates: Any) -> Any:
    """Return the first candidate that is not ``None``.

    Callers list the variant-specific alias first and the generic field name
    after it.
    """
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
