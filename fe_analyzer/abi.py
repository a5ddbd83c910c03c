"""ABI names, components and encodings of fixed-size types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .types import (
    Array,
    Contract,
    FeString,
    Integer,
    Map,
    Primitive,
    Struct,
    Tuple,
)


@dataclass(frozen=True, order=True)
class AbiUintSize:
    """Data size and padded size of a uint element in the ABI encoding.

    A byte inside a byte array has a padded size of 1 and a data size of 1,
    while an address has a padded size of 32 bytes and a data size of 32.
    """

    data_size: int
    padded_size: int


@dataclass(frozen=True, order=True)
class AbiUint:
    """An element encoded as a uint."""

    size: AbiUintSize


@dataclass(frozen=True)
class AbiArray:
    """An array of elements; ``size`` is ``None`` when the array is dynamic."""

    inner: "AbiType"
    size: Optional[int]

    @property
    def is_dynamic(self) -> bool:
        return self.size is None


@dataclass(frozen=True)
class AbiTuple:
    """A tuple of ABI elements."""

    elems: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elems", tuple(self.elems))


AbiType = Union[AbiUint, AbiArray, AbiTuple]


class AbiDecodeLocation(Enum):
    """Where data is decoded from."""

    CALLDATA = "calldata"
    MEMORY = "memory"


@dataclass(frozen=True)
class AbiComponent:
    """A single component of an ABI tuple."""

    name: str
    typ: str
    components: tuple = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))


_PADDED_WORD = 32


def _not_encodable(typ: object) -> TypeError:
    return TypeError(f"type {typ} is not abi encodable")


def abi_json_name(typ) -> str:
    """The name of the type as it appears in the JSON ABI."""
    match typ:
        case Integer():
            prefix = "int" if typ.is_signed() else "uint"
            return f"{prefix}{typ.byte_size() * 8}"
        case Primitive.UNIT:
            raise TypeError("unit type is not abi encodable")
        case Primitive():
            return typ.value
        case Array():
            if typ.inner is Primitive.BYTE:
                return f"bytes{typ.size}"
            return f"{abi_json_name(typ.inner)}[{typ.size}]"
        case Struct() | Tuple():
            return "tuple"
        case FeString():
            return "string"
    raise _not_encodable(typ)


def abi_selector_name(typ) -> str:
    """The name of the type as it appears in a selector preimage."""
    match typ:
        case Struct():
            return "(" + ",".join(abi_json_name(t) for _, t in typ.fields) + ")"
        case Tuple():
            return "(" + ",".join(abi_json_name(t) for t in typ.items) + ")"
    return abi_json_name(typ)


def abi_components(typ) -> list[AbiComponent]:
    """The components of an ABI tuple; empty for non-tuple types."""
    match typ:
        case Struct():
            return [AbiComponent(name, abi_json_name(t)) for name, t in typ.fields]
        case Tuple():
            return [
                AbiComponent(f"item{index}", abi_json_name(item))
                for index, item in enumerate(typ.items)
            ]
        case Integer() | Primitive() | Array() | FeString():
            return []
    raise _not_encodable(typ)


def abi_type(typ) -> AbiType:
    """The ABI type of a fixed-size type."""
    match typ:
        case Integer():
            return AbiUint(AbiUintSize(typ.byte_size(), _PADDED_WORD))
        case Primitive.BOOL:
            return AbiUint(AbiUintSize(1, _PADDED_WORD))
        case Primitive.ADDRESS:
            return AbiUint(AbiUintSize(32, _PADDED_WORD))
        case Primitive.BYTE:
            return AbiUint(AbiUintSize(1, 1))
        case Primitive.UNIT:
            raise TypeError("unit type is not abi encodable")
        case Array():
            return AbiArray(abi_type(typ.inner), typ.size)
        case Struct():
            return AbiTuple(tuple(abi_type(t) for _, t in typ.fields))
        case Tuple():
            return AbiTuple(tuple(abi_type(t) for t in typ.items))
        case FeString():
            return AbiArray(AbiUint(AbiUintSize(1, 1)), None)
    raise _not_encodable(typ)


def lower_snake(typ) -> str:
    """A lower_snake_case name for the type, safe to build identifiers from."""
    match typ:
        case Integer() | Primitive():
            return typ.value
        case Array():
            return f"array_{lower_snake(typ.inner)}_{typ.size}"
        case Struct():
            return f"struct_{typ.name}"
        case Tuple():
            return "tuple_" + "_".join(lower_snake(t) for t in typ.items)
        case FeString():
            return f"string_{typ.max_size}"
        case Contract() | Map():
            raise TypeError(f"type {typ} has no safe name")
    raise TypeError(f"type {typ} has no safe name")