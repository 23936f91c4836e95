from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable, Optional


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment, MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if not segment.lstrip("-").isdigit():
            return MISSING
        idx = int(segment)
        if -len(current) <= idx < len(current):
            return current[idx]
        return MISSING
    if current is None or isinstance(current, (str, bytes, int, float, bool)):
        return MISSING
    return getattr(current, segment, MISSING)


def resolve_path(source: Any, path: str) -> Any:
    """Walk a dotted path through mappings, lists and attributes.

    Returns ``MISSING`` as soon as a segment cannot be followed.
    """
    current = source
    for segment in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        try:
            current = _step(current, segment)
        except Exception:
            return MISSING
    return current


def is_present(value: Any) -> bool:
    if value is None or value is MISSING:
        return False
    return value != ""


def resolve(
    source: Any,
    candidates: Iterable[str],
    fallback: Any = None,
    accept: Optional[Callable[[Any], bool]] = None,
) -> Any:
    """Return the value of the first candidate path that holds something.

    Candidates are tried in order; a value counts when it is neither ``None``
    nor ``""`` (whitespace counts), and passes ``accept`` when one is given.
    ``fallback`` is returned when nothing matches.
    """
    for path in candidates:
        value = resolve_path(source, path)
        if is_present(value) and (accept is None or accept(value)):
            return value
    return fallback
