"""
Controller Options

Free-form option bag shared between a controller and its formatter during a
single render. Attribute access, item access and get/set all address the same
slot, whatever the key type:

    options.foo == options["foo"] == options.get("foo")

Unset options read as None. Options named like the container's own methods
(see RESERVED_NAMES) are reachable through item access and get/set only.
"""

from typing import Any, Dict, Iterator, Mapping, Optional, Union

RESERVED_NAMES = frozenset({"get", "set", "pop", "update", "to_dict", "merge", "copy"})


def normalize_key(key: Any) -> str:
    """Return the canonical slot name for an option key."""
    return key if isinstance(key, str) else str(key)


class Options:
    """
    Indifferent-access options container.

    Keys are normalized with str(), so "foo" and any symbol-like object whose
    string form is "foo" share one slot. Values are never validated.
    """

    def __init__(self, values: Optional[Union[Mapping, "Options"]] = None, **kwargs: Any):
        object.__setattr__(self, "_table", {})
        if values is not None:
            self.update(values)
        if kwargs:
            self.update(kwargs)

    # ---- attribute access -------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Private and dunder lookups must fail normally (copy, pickle, hasattr checks)
        if name.startswith("_"):
            raise AttributeError(name)
        return self._table.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        key = normalize_key(name)
        if key in RESERVED_NAMES:
            raise AttributeError(f"{key!r} is an Options method, use options[{key!r}] = ... instead")
        self._table[key] = value

    def __delattr__(self, name: str) -> None:
        self._table.pop(normalize_key(name), None)

    # ---- item access ------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        return self._table.get(normalize_key(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._table[normalize_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        self._table.pop(normalize_key(key), None)

    def __contains__(self, key: Any) -> bool:
        return normalize_key(key) in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._table))

    def __len__(self) -> int:
        return len(self._table)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Options):
            return self._table == other._table
        if isinstance(other, Mapping):
            return self._table == {normalize_key(k): v for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._table.items())
        return f"Options({fields})"

    def __copy__(self) -> "Options":
        return self.copy()

    # ---- explicit API -----------------------------------------------

    def get(self, key: Any, default: Any = None) -> Any:
        return self._table.get(normalize_key(key), default)

    def set(self, key: Any, value: Any) -> None:
        self._table[normalize_key(key)] = value

    def pop(self, key: Any, default: Any = None) -> Any:
        return self._table.pop(normalize_key(key), default)

    def update(self, values: Union[Mapping, "Options"]) -> None:
        """Write every entry of a mapping (or another Options) into this container."""
        items = values.to_dict().items() if isinstance(values, Options) else values.items()
        for key, value in items:
            self._table[normalize_key(key)] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return the options as a plain dict (a copy; values are shared)."""
        return dict(self._table)

    def merge(self, other: Union[Mapping, "Options"]) -> "Options":
        """
        Return a new container where other's entries override this one's.

        Neither input is modified.
        """
        merged = self.copy()
        merged.update(other)
        return merged

    def copy(self) -> "Options":
        """Return an independent container holding the same values."""
        return Options(self._table)
