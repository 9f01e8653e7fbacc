"""
Value objects with structural equality.

``ValueType`` derives ``==``, ``hash()`` and ``str()`` from the dataclass
field list of its subclass, so a new value object only has to declare its
fields::

    @dataclass(frozen=True, eq=False, repr=False)
    class Address(ValueType):
        street: str
        building: str

``eq=False`` / ``repr=False`` leave the generated methods to ``ValueType``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional


class ValueType:
    """Base class for immutable data holders compared by field content."""

    _HASH_SEED = 1113
    _HASH_STEP = 57

    @classmethod
    def value_fields(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def _values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self.value_fields())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self) -> int:
        result = 0
        multiplier = self._HASH_SEED
        for value in self._values():
            if value is None:
                continue
            result += hash(value) * multiplier
            multiplier += self._HASH_STEP
        return hash(result)

    def __str__(self) -> str:
        parts = sorted(
            f"{name}: {'' if value is None else value}"
            for name, value in zip(self.value_fields(), self._values())
        )
        return f"{type(self).__name__}({'; '.join(parts)})"

    __repr__ = __str__


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False, repr=False)
class Address(ValueType):
    street: str
    building: str

    @classmethod
    def empty(cls) -> Address:
        return cls("", "")

    @property
    def is_empty(self) -> bool:
        return not self.street and not self.building


@dataclass(frozen=True, eq=False, repr=False)
class PersonName(ValueType):
    first_name: Optional[str]
    last_name: Optional[str]

    @classmethod
    def empty(cls) -> PersonName:
        return cls(None, None)


@dataclass(frozen=True, eq=False, repr=False)
class Car(ValueType):
    color: Optional[str] = None
    model: Optional[str] = None
    plate_number: Optional[str] = None

    @classmethod
    def empty(cls) -> Car:
        return cls()


@dataclass(frozen=True, eq=False, repr=False)
class DriverDetails(ValueType):
    """What the driver directory knows about a driver id."""

    name: PersonName
    car: Car
