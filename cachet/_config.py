import typing as tp

from ._exceptions import ConfigurationError

T = tp.TypeVar("T")

__all__ = ("DEFAULT", "resolve_option")


class _Default:
    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT: tp.Any = _Default()
"""Marks an option that was not supplied and should fall back to its default."""


def resolve_option(name: str, value: tp.Any, default: tp.Callable[[], T], expected: tp.Optional[type] = None) -> T:
    """
    Resolves a single transport option.

    An option left as `DEFAULT` is built by `default`, while an option
    explicitly set to None is rejected.

    :raises ConfigurationError: When the value is None or not an instance of `expected`
    """

    if value is DEFAULT:
        return default()

    if value is None:
        raise ConfigurationError(f"cachet: {name} must be non-None")

    if expected is not None and not isinstance(value, expected):
        raise ConfigurationError(
            f"cachet: {name} must be an instance of {expected.__name__}, got {type(value).__name__}"
        )
    return tp.cast(T, value)
