"""The types of the language and their sizes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .errors import AlreadyDefined, SemanticError

MAX_INDEXED_EVENT_FIELDS = 3


def u256_min() -> int:
    return 0


def u256_max() -> int:
    return 2**256 - 1


def i256_max() -> int:
    return 2**255 - 1


def i256_min() -> int:
    return -(2**255)


class _RankedBase:
    """Orders base types: every integer before every primitive."""

    def _rank(self) -> int:
        return _BASE_RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (Integer, Primitive)):
            return NotImplemented
        return self._rank() < other._rank()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, (Integer, Primitive)):
            return NotImplemented
        return self._rank() <= other._rank()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, (Integer, Primitive)):
            return NotImplemented
        return self._rank() > other._rank()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, (Integer, Primitive)):
            return NotImplemented
        return self._rank() >= other._rank()


class Integer(_RankedBase, Enum):
    """The numeric types."""

    U256 = "u256"
    U128 = "u128"
    U64 = "u64"
    U32 = "u32"
    U16 = "u16"
    U8 = "u8"
    I256 = "i256"
    I128 = "i128"
    I64 = "i64"
    I32 = "i32"
    I16 = "i16"
    I8 = "i8"

    def __str__(self) -> str:
        return self.value

    def is_signed(self) -> bool:
        return self.value.startswith("i")

    def byte_size(self) -> int:
        return int(self.value[1:]) // 8

    def can_hold(self, other: Integer) -> bool:
        """Whether this type is at least as large as ``other``."""
        return self.byte_size() >= other.byte_size()

    def fits(self, num: int) -> bool:
        """Whether ``num`` lies in the range of this type."""
        bits = self.byte_size() * 8
        if self.is_signed():
            return -(2 ** (bits - 1)) <= num <= 2 ** (bits - 1) - 1
        return 0 <= num <= 2**bits - 1


class Primitive(_RankedBase, Enum):
    """The non-numeric base types."""

    BOOL = "bool"
    BYTE = "byte"
    ADDRESS = "address"
    UNIT = "unit"

    def __str__(self) -> str:
        return "()" if self is Primitive.UNIT else self.value

    def byte_size(self) -> int:
        return _PRIMITIVE_SIZES[self]


_PRIMITIVE_SIZES = {
    Primitive.BOOL: 1,
    Primitive.BYTE: 1,
    Primitive.ADDRESS: 32,
    Primitive.UNIT: 0,
}

_BASE_RANKS = {
    member: rank for rank, member in enumerate([*Integer, *Primitive])
}

U256 = Integer.U256


@dataclass(frozen=True, order=True)
class Array:
    """A fixed-length array of a base type."""

    size: int
    inner: Base

    def byte_size(self) -> int:
        return self.size * self.inner.byte_size()

    def __str__(self) -> str:
        return f"{self.inner}[{self.size}]"


@dataclass(frozen=True)
class Map:
    """A storage mapping from a base type to any type."""

    key: Base
    value: Type

    def __str__(self) -> str:
        return f"Map<{self.key}, {self.value}>"


@dataclass(frozen=True)
class Tuple:
    """A non-empty tuple of fixed-size types."""

    items: tuple

    def __post_init__(self) -> None:
        items = tuple(self.items)
        if not items:
            raise ValueError("a tuple needs at least one item")
        object.__setattr__(self, "items", items)

    def byte_size(self) -> int:
        return sum(item.byte_size() for item in self.items)

    def __str__(self) -> str:
        return "(" + ", ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True, order=True)
class FeString:
    """A string with a maximum length."""

    max_size: int

    def byte_size(self) -> int:
        return self.max_size + 32

    def __str__(self) -> str:
        return f"string<{self.max_size}>"


@dataclass(frozen=True)
class FunctionAttributes:
    """The signature of a contract function."""

    is_public: bool
    name: str
    params: tuple
    return_type: FixedSize

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "params", tuple((name, typ) for name, typ in self.params)
        )

    def param_types(self) -> list[FixedSize]:
        return [typ for _, typ in self.params]

    def param_names(self) -> list[str]:
        return [name for name, _ in self.params]

    @classmethod
    def from_def(cls, definition: Any) -> FunctionAttributes:
        """Build attributes from a contract function definition."""
        return cls(
            is_public=definition.is_public,
            name=definition.name,
            params=definition.params,
            return_type=definition.return_type,
        )


@dataclass(frozen=True)
class Contract:
    """A contract type and the functions it exposes."""

    name: str
    functions: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", tuple(self.functions))

    def byte_size(self) -> int:
        return 32

    def __str__(self) -> str:
        return self.name


@dataclass(eq=True)
class Struct:
    """A user-defined struct with named fields in declaration order."""

    name: str
    fields: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fields = [(name, typ) for name, typ in self.fields]

    def __hash__(self) -> int:
        return hash(("struct", self.name))

    def is_empty(self) -> bool:
        return not self.fields

    def add_field(self, name: str, value: FixedSize) -> None:
        """Append a field; raises ``AlreadyDefined`` if the name is taken."""
        if any(existing == name for existing, _ in self.fields):
            raise AlreadyDefined(name)
        self.fields.append((name, value))

    def get_field_type(self, name: str) -> Optional[FixedSize]:
        return next((typ for fname, typ in self.fields if fname == name), None)

    def get_field_index(self, name: str) -> Optional[int]:
        return next(
            (index for index, (fname, _) in enumerate(self.fields) if fname == name),
            None,
        )

    def byte_size(self) -> int:
        return len(self.fields) * 32

    def __str__(self) -> str:
        return self.name


Base = Union[Integer, Primitive]
FixedSize = Union[Integer, Primitive, Array, Tuple, FeString, Contract, Struct]
Type = Union[Integer, Primitive, Array, Map, Tuple, FeString, Contract, Struct]

_FIXED_SIZE_CLASSES = (Integer, Primitive, Array, Tuple, FeString, Contract, Struct)


def is_fixed_size(typ: object) -> bool:
    return isinstance(typ, _FIXED_SIZE_CLASSES)


def to_fixed_size(typ: Type) -> FixedSize:
    """Return ``typ`` as a fixed-size type; maps raise a type error."""
    if not is_fixed_size(typ):
        raise SemanticError.type_error()
    return typ


def byte_size(typ: Type) -> int:
    """The constant size of a fixed-size type."""
    if not is_fixed_size(typ):
        raise TypeError(f"type {typ} has no fixed size")
    return typ.byte_size()


def is_unit(typ: object) -> bool:
    return typ is Primitive.UNIT


def is_signed_integer(typ: object) -> bool:
    return isinstance(typ, Integer) and typ.is_signed()


def as_int(typ: object) -> Optional[Integer]:
    return typ if isinstance(typ, Integer) else None