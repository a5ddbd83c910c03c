"""Type checking of index and binary operations."""

from __future__ import annotations

from enum import Enum

from .errors import SemanticError
from .types import Array, Integer, Map, Type


class BinOperator(Enum):
    """Binary operators."""

    ADD = "+"
    SUB = "-"
    MULT = "*"
    DIV = "/"
    MOD = "%"
    POW = "**"
    LSHIFT = "<<"
    RSHIFT = ">>"
    BIT_OR = "|"
    BIT_XOR = "^"
    BIT_AND = "&"


def index(value: Type, index: Type) -> Type:
    """The type of ``value[index]``; raises ``SemanticError`` on misuse."""
    if isinstance(value, Array):
        if index != Integer.U256:
            raise SemanticError.type_error()
        return value.inner
    if isinstance(value, Map):
        if index != value.key:
            raise SemanticError.type_error()
        return value.value
    raise SemanticError.not_subscriptable()


def _numeric_pair(left: Type, right: Type) -> tuple[Integer, Integer]:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return left, right
    raise SemanticError.type_error()


def _arithmetic(left: Type, right: Type) -> Type:
    # Both operands must be numeric and of the same type.
    left, right = _numeric_pair(left, right)
    if left != right:
        raise SemanticError.type_error()
    return left


def _pow(left: Type, right: Type) -> Type:
    # The exponent must be unsigned and no larger than the base.
    left, right = _numeric_pair(left, right)
    if right.is_signed():
        raise SemanticError.signed_exponent_not_allowed()
    if not left.can_hold(right):
        raise SemanticError.type_error()
    return left


def _bit_shift(left: Type, right: Type) -> Type:
    left, right = _numeric_pair(left, right)
    if right.is_signed():
        raise SemanticError.type_error()
    return left


def _bitwise(left: Type, right: Type) -> Type:
    left, right = _numeric_pair(left, right)
    if left.is_signed() or left != right:
        raise SemanticError.type_error()
    return left


_CHECKS = {
    BinOperator.ADD: _arithmetic,
    BinOperator.SUB: _arithmetic,
    BinOperator.MULT: _arithmetic,
    BinOperator.DIV: _arithmetic,
    BinOperator.MOD: _arithmetic,
    BinOperator.POW: _pow,
    BinOperator.LSHIFT: _bit_shift,
    BinOperator.RSHIFT: _bit_shift,
    BinOperator.BIT_OR: _bitwise,
    BinOperator.BIT_XOR: _bitwise,
    BinOperator.BIT_AND: _bitwise,
}


def bin_op(left: Type, op: BinOperator, right: Type) -> Type:
    """The type of ``left op right``; raises ``SemanticError`` on misuse."""
    return _CHECKS[op](left, right)