"""Names of the built-in objects, fields and methods of the language."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar


class _Builtin(str, Enum):
    """A built-in name whose string form is its spelling in source code."""

    def __str__(self) -> str:
        return self.value


class ValueMethod(_Builtin):
    """Methods that can be called on any value."""

    CLONE = "clone"
    TO_MEM = "to_mem"
    ABI_ENCODE = "abi_encode"


class GlobalMethod(_Builtin):
    """Functions available everywhere without a receiver."""

    KECCAK256 = "keccak256"


class ContractTypeMethod(_Builtin):
    """Methods that can be called on a contract type."""

    CREATE = "create"
    CREATE2 = "create2"


class Object(_Builtin):
    """Built-in objects whose fields can be read."""

    BLOCK = "block"
    CHAIN = "chain"
    MSG = "msg"
    TX = "tx"
    SELF = "self"


class BlockField(_Builtin):
    """Fields of the ``block`` object."""

    COINBASE = "coinbase"
    DIFFICULTY = "difficulty"
    NUMBER = "number"
    TIMESTAMP = "timestamp"


class ChainField(_Builtin):
    """Fields of the ``chain`` object."""

    ID = "id"


class MsgField(_Builtin):
    """Fields of the ``msg`` object."""

    SENDER = "sender"
    SIG = "sig"
    VALUE = "value"


class TxField(_Builtin):
    """Fields of the ``tx`` object."""

    GAS_PRICE = "gas_price"
    ORIGIN = "origin"


class SelfField(_Builtin):
    """Fields of the ``self`` object."""

    ADDRESS = "address"


E = TypeVar("E", bound=_Builtin)


def parse_builtin(enum_cls: type[E], name: str) -> E:
    """Return the member of ``enum_cls`` spelled ``name``.

    Raises ``ValueError`` if no member has that spelling.
    """
    for member in enum_cls:
        if member.value == name:
            return member
    raise ValueError(f"{name!r} is not a valid {enum_cls.__name__}")