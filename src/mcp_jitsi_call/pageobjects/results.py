"""Decoding of values returned by execute_script."""

from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, Optional


def is_boolean(raw: Any) -> bool:
    return isinstance(raw, bool)


def is_number(raw: Any) -> bool:
    # bool is an int subclass; a JS boolean is never a count
    return isinstance(raw, Number) and not isinstance(raw, bool)


def is_list(raw: Any) -> bool:
    return isinstance(raw, list)


def is_mapping(raw: Any) -> bool:
    return isinstance(raw, dict)


def is_not_string(raw: Any) -> bool:
    """Scripts that return nothing on success and e.message on failure."""
    return not isinstance(raw, str)


@dataclass(frozen=True)
class ScriptResult:
    """
    Result of one script execution: either a value of the expected shape
    or a diagnostic message.
    """

    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        return self.value if self.ok else default

    @classmethod
    def decode(cls, raw: Any, shape: Callable[[Any], bool]) -> "ScriptResult":
        if shape(raw):
            return cls(value=raw)
        if isinstance(raw, str):
            return cls(error=raw)
        return cls(error=f"unexpected {type(raw).__name__}: {raw!r}")


__all__ = [
    "ScriptResult",
    "is_boolean",
    "is_number",
    "is_list",
    "is_mapping",
    "is_not_string",
]
