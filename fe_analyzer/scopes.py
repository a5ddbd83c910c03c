"""Module, contract and block scopes used during analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, TypeVar, Union

from .errors import AlreadyDefined
from .events import EventDef
from .types import Array, FixedSize, Type

B = TypeVar("B")


@dataclass
class ContractFunctionDef:
    """A function defined on a contract."""

    is_public: bool
    name: str
    params: list
    return_type: FixedSize
    scope: "BlockScope"


@dataclass(frozen=True)
class ContractFieldDef:
    """A storage field of a contract, with its position among the fields."""

    nonce: int
    typ: Type


class BlockScopeType(Enum):
    """What kind of block a block scope belongs to."""

    FUNCTION = "function"
    IF_ELSE = "if_else"
    LOOP = "loop"


@dataclass(eq=False)
class ModuleScope:
    """The top-level scope holding the module's type definitions."""

    type_defs: dict = field(default_factory=dict)
    tuples_used: set = field(default_factory=set)

    def add_type_def(self, name: str, typ: Type) -> None:
        """Add a type definition; raises ``AlreadyDefined`` if taken."""
        if name in self.type_defs:
            raise AlreadyDefined(name)
        self.type_defs[name] = typ

    def get_type_defs(self, predicate: Callable[[Type], Optional[B]]) -> list[B]:
        """Map type definitions, in name order, keeping non-``None`` results."""
        results = (predicate(self.type_defs[name]) for name in sorted(self.type_defs))
        return [result for result in results if result is not None]

    def get_type_def(self, name: str) -> Optional[Type]:
        return self.type_defs.get(name)


@dataclass(eq=False)
class ContractScope:
    """The scope of a contract body."""

    name: str
    parent: ModuleScope
    interface: list = field(default_factory=list)
    event_defs: dict = field(default_factory=dict)
    field_defs: dict = field(default_factory=dict)
    function_defs: dict = field(default_factory=dict)
    list_expressions: set = field(default_factory=set)
    string_defs: set = field(default_factory=set)
    created_contracts: set = field(default_factory=set)
    _num_fields: int = field(default=0, repr=False)

    def module_scope(self) -> ModuleScope:
        return self.parent

    def get_module_type_defs(self, predicate: Callable[[Type], Optional[B]]) -> list[B]:
        return self.parent.get_type_defs(predicate)

    def event_def(self, name: str) -> Optional[EventDef]:
        return self.event_defs.get(name)

    def field_def(self, name: str) -> Optional[ContractFieldDef]:
        return self.field_defs.get(name)

    def function_def(self, name: str) -> Optional[ContractFunctionDef]:
        return self.function_defs.get(name)

    def add_field(self, name: str, typ: Type) -> None:
        """Add a storage field; raises ``AlreadyDefined`` if taken."""
        if name in self.field_defs:
            raise AlreadyDefined(name)
        self.field_defs[name] = ContractFieldDef(self._num_fields, typ)
        self._num_fields += 1

    def add_function(
        self,
        name: str,
        is_public: bool,
        params: list,
        return_type: FixedSize,
        scope: BlockScope,
    ) -> ContractFunctionDef:
        """Add a function; raises ``AlreadyDefined`` if taken."""
        if name in self.function_defs:
            raise AlreadyDefined(name)
        definition = ContractFunctionDef(
            is_public, name, [(n, t) for n, t in params], return_type, scope
        )
        self.function_defs[name] = definition
        return definition

    def add_event(self, name: str, event: EventDef) -> None:
        """Add an event; raises ``AlreadyDefined`` if taken."""
        if name in self.event_defs:
            raise AlreadyDefined(name)
        self.event_defs[name] = event

    def add_string(self, value: str) -> None:
        self.string_defs.add(value)

    def add_created_contract(self, name: str) -> None:
        self.created_contracts.add(name)

    def add_used_list_expression(self, typ: Array) -> None:
        self.list_expressions.add(typ)


@dataclass(eq=False)
class BlockScope:
    """The scope of a function body or a block nested inside one."""

    name: str
    typ: BlockScopeType
    parent: Union[ContractScope, "BlockScope"]
    variable_defs: dict = field(default_factory=dict)

    @classmethod
    def from_contract_scope(cls, name: str, parent: ContractScope) -> BlockScope:
        return cls(name, BlockScopeType.FUNCTION, parent)

    @classmethod
    def from_block_scope(cls, typ: BlockScopeType, parent: BlockScope) -> BlockScope:
        return cls("BlockScope", typ, parent)

    def _scope_boundary(self) -> tuple[ContractScope, BlockScope]:
        """The contract scope and its immediate block scope child."""
        last_block: BlockScope = self
        parent = self.parent
        while isinstance(parent, BlockScope):
            last_block = parent
            parent = parent.parent
        return parent, last_block

    def contract_scope(self) -> ContractScope:
        return self._scope_boundary()[0]

    def module_scope(self) -> ModuleScope:
        return self.contract_scope().parent

    def function_scope(self) -> BlockScope:
        return self._scope_boundary()[1]

    def contract_event_def(self, name: str) -> Optional[EventDef]:
        return self.contract_scope().event_def(name)

    def contract_field_def(self, name: str) -> Optional[ContractFieldDef]:
        return self.contract_scope().field_def(name)

    def contract_function_def(self, name: str) -> Optional[ContractFunctionDef]:
        return self.contract_scope().function_def(name)

    def current_function_def(self) -> Optional[ContractFunctionDef]:
        """The definition of the function this block belongs to."""
        return self.contract_function_def(self.function_scope().name)

    def get_variable_def(self, name: str) -> Optional[FixedSize]:
        """Look a variable up in this block and the blocks around it."""
        scope: Union[ContractScope, BlockScope] = self
        while isinstance(scope, BlockScope):
            if name in scope.variable_defs:
                return scope.variable_defs[name]
            scope = scope.parent
        return None

    def add_var(self, name: str, typ: FixedSize) -> None:
        """Add a variable; raises ``AlreadyDefined`` if visible already."""
        if self.get_variable_def(name) is not None:
            raise AlreadyDefined(name)
        self.variable_defs[name] = typ

    def inherits_type(self, typ: BlockScopeType) -> bool:
        """Whether this block or any block around it is of ``typ``."""
        scope: Union[ContractScope, BlockScope] = self
        while isinstance(scope, BlockScope):
            if scope.typ == typ:
                return True
            scope = scope.parent
        return False

    def get_module_type_defs(self, predicate: Callable[[Type], Optional[B]]) -> list[B]:
        return self.module_scope().get_type_defs(predicate)

    def get_module_type_def(self, name: str) -> Optional[Type]:
        return self.module_scope().get_type_def(name)


def module_scope_of(scope: Union[ModuleScope, ContractScope, BlockScope]) -> ModuleScope:
    """The module scope that any scope belongs to."""
    if isinstance(scope, ModuleScope):
        return scope
    return scope.module_scope()