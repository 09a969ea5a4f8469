"""
Parameter container: the typed name -> value sink a line is read into.

The reader only relies on two methods, `insert(name, value)` and
`get(name)`, so callers may pass any object that offers them. This class is
the default implementation.
"""

from typing import Any, Dict, Iterator, List, Optional, Type

from datline.errors import DuplicateKey

_MISSING = object()


class ParameterContainer:
    """
    Append-only mapping from parameter name to value.

    Values are scalars (int, float, bool, str) or lists of int/float.
    Each name may be written once per line.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def insert(self, name: str, value: Any) -> None:
        """
        Store `value` under `name`.

        Raises:
            DuplicateKey: If `name` was already written
        """
        if name in self._values:
            raise DuplicateKey(name)
        if isinstance(value, (list, tuple)):
            value = list(value)
        self._values[name] = value

    def get(self, name: str, expected_type: Optional[Type] = None, default: Any = _MISSING) -> Any:
        """
        Retrieve a value by name.

        Args:
            name: Parameter name
            expected_type: If given, the value must be an instance of it
                (a bool never counts as an int)
            default: Returned when `name` is absent; KeyError otherwise

        Raises:
            KeyError: Name absent and no default given
            TypeError: Value has the wrong type
        """
        if name not in self._values:
            if default is _MISSING:
                raise KeyError(name)
            return default

        value = self._values[name]
        if expected_type is not None:
            wrong_bool = isinstance(value, bool) and expected_type is not bool
            if wrong_bool or not isinstance(value, expected_type):
                raise TypeError(
                    f"Parameter '{name}' holds {type(value).__name__}, not {expected_type.__name__}"
                )
        return value

    def names(self) -> List[str]:
        """Names in insertion order."""
        return list(self._values)

    def to_dict(self) -> Dict[str, Any]:
        return {name: (list(v) if isinstance(v, list) else v) for name, v in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"ParameterContainer({self._values!r})"


__all__ = ["ParameterContainer"]
