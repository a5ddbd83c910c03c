"""Attributes the analysis attaches to syntax-tree nodes, and the diagnostics it collects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Iterable, Optional, Union

from .builtins import GlobalMethod
from .errors import CannotMove, Diagnostic, Label, Severity, Span
from .events import EventDef
from .scopes import ContractScope, ModuleScope
from .types import (
    Array,
    Contract,
    FeString,
    FixedSize,
    FunctionAttributes,
    Integer,
    Primitive,
    Struct,
    Tuple,
    Type,
)


class LocationKind(Enum):
    """Where an expression's value lives."""

    STORAGE = "storage"
    MEMORY = "memory"
    VALUE = "value"


@dataclass(frozen=True)
class Location:
    """Indicates where an expression is stored.

    A storage location may not have a nonce known at compile time, so the
    nonce is optional; other locations never carry one.
    """

    kind: LocationKind
    nonce: Optional[int] = None

    MEMORY: ClassVar["Location"]
    VALUE: ClassVar["Location"]

    def __post_init__(self) -> None:
        if self.nonce is not None and self.kind is not LocationKind.STORAGE:
            raise ValueError("only storage locations carry a nonce")

    @classmethod
    def storage(cls, nonce: Optional[int] = None) -> Location:
        return cls(LocationKind.STORAGE, nonce)

    @classmethod
    def assign_location(cls, typ: FixedSize) -> Location:
        """Where a value of ``typ`` is expected when assigned, returned or passed."""
        if isinstance(typ, (Integer, Primitive, Contract)):
            return cls.VALUE
        if isinstance(typ, (Array, Tuple, FeString, Struct)):
            return cls.MEMORY
        raise TypeError(f"type {typ} has no assign location")

    def __str__(self) -> str:
        if self.kind is LocationKind.STORAGE:
            return f"storage(nonce={self.nonce})"
        return self.kind.value


Location.MEMORY = Location(LocationKind.MEMORY)
Location.VALUE = Location(LocationKind.VALUE)


@dataclass
class ContractAttributes:
    """Information about a contract definition."""

    public_functions: list = field(default_factory=list)
    init_function: Optional[FunctionAttributes] = None
    events: list = field(default_factory=list)
    list_expressions: list = field(default_factory=list)
    string_literals: list = field(default_factory=list)
    structs: list = field(default_factory=list)
    external_contracts: list = field(default_factory=list)
    created_contracts: list = field(default_factory=list)

    @classmethod
    def from_scope(cls, scope: ContractScope) -> ContractAttributes:
        """Collect the attributes of a contract from its scope."""
        public_functions = []
        init_function = None
        for name in sorted(scope.function_defs):
            definition = scope.function_defs[name]
            if not definition.is_public:
                continue
            if name == "__init__":
                init_function = FunctionAttributes(
                    is_public=definition.is_public,
                    name=name,
                    params=definition.params,
                    return_type=Primitive.UNIT,
                )
            else:
                public_functions.append(FunctionAttributes.from_def(definition))

        def external(typ: Type) -> Optional[Contract]:
            if isinstance(typ, Contract) and typ.name != scope.name:
                return typ
            return None

        def struct(typ: Type) -> Optional[Struct]:
            return typ if isinstance(typ, Struct) else None

        return cls(
            public_functions=public_functions,
            init_function=init_function,
            events=[scope.event_defs[name] for name in sorted(scope.event_defs)],
            list_expressions=sorted(scope.list_expressions),
            string_literals=sorted(scope.string_defs),
            structs=scope.get_module_type_defs(struct),
            external_contracts=scope.get_module_type_defs(external),
            created_contracts=sorted(scope.created_contracts),
        )


@dataclass(frozen=True)
class ExpressionAttributes:
    """The type and location of an expression, and any move it needs."""

    typ: Type
    location: Location
    move_location: Optional[Location] = None

    def into_cloned(self) -> ExpressionAttributes:
        """The same attributes with a move to memory."""
        return replace(self, move_location=Location.MEMORY)

    def into_loaded(self) -> ExpressionAttributes:
        """The same attributes with a move to value, if not a value already.

        Raises ``CannotMove`` if the type cannot be held as a value.
        """
        if not isinstance(self.typ, (Integer, Primitive, Contract)):
            raise CannotMove(str(self.typ))
        if self.location != Location.VALUE:
            return replace(self, move_location=Location.VALUE)
        return self

    def final_location(self) -> Location:
        """The location of the expression after a possible move."""
        if self.move_location is not None:
            return self.move_location
        return self.location


@dataclass(frozen=True)
class BuiltinFunction:
    """A call to a global built-in function."""

    func: GlobalMethod


@dataclass(frozen=True)
class TypeConstructor:
    """A call that constructs a value of a type."""

    typ: Type


@dataclass(frozen=True)
class SelfAttribute:
    """A call to a function of the current contract."""

    func_name: str


@dataclass(frozen=True)
class ValueAttribute:
    """A call to a method of a value."""


@dataclass(frozen=True)
class TypeAttribute:
    """A call to a function of a type."""

    typ: Type
    func_name: str


CallType = Union[
    BuiltinFunction, TypeConstructor, SelfAttribute, ValueAttribute, TypeAttribute
]


@dataclass
class ModuleAttributes:
    """Type definitions of a module and the tuples it uses."""

    type_defs: dict = field(default_factory=dict)
    tuples_used: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_scope(cls, scope: ModuleScope) -> ModuleAttributes:
        return cls(
            type_defs={name: scope.type_defs[name] for name in sorted(scope.type_defs)},
            tuples_used=frozenset(scope.tuples_used),
        )


@dataclass
class Context:
    """Information about a module, queried by the ids of its nodes."""

    file_id: int = 0
    node_ids: list = field(default_factory=list)
    spans: dict = field(default_factory=dict)
    expressions: dict = field(default_factory=dict)
    emits: dict = field(default_factory=dict)
    functions: dict = field(default_factory=dict)
    declarations: dict = field(default_factory=dict)
    contracts: dict = field(default_factory=dict)
    calls: dict = field(default_factory=dict)
    events: dict = field(default_factory=dict)
    type_descs: dict = field(default_factory=dict)
    module: Optional[ModuleAttributes] = None
    diagnostics: list = field(default_factory=list)
    _fresh_id: int = field(default=0, repr=False)

    def _add(self, table: dict, node_id: int, span: Span, value: Any, what: str) -> None:
        if node_id in table:
            raise ValueError(f"{what} attributes already exist")
        self.node_ids.append(node_id)
        self.spans[node_id] = span
        table[node_id] = value

    def _spanned(self, table: dict) -> list:
        return [
            (self.spans[node_id], table[node_id])
            for node_id in self.node_ids
            if node_id in table
        ]

    def add_expression(
        self, node_id: int, span: Span, attributes: ExpressionAttributes
    ) -> None:
        """Attribute information to an expression; raises ``ValueError`` if present."""
        self._add(self.expressions, node_id, span, attributes, "expression")

    def update_expression(self, node_id: int, attributes: ExpressionAttributes) -> None:
        """Replace an expression's attributes; raises ``KeyError`` if absent."""
        if node_id not in self.expressions:
            raise KeyError("expression attributes do not exist")
        self.expressions[node_id] = attributes

    def get_expression(self, node_id: int) -> Optional[ExpressionAttributes]:
        return self.expressions.get(node_id)

    def add_emit(self, node_id: int, span: Span, event: EventDef) -> None:
        self._add(self.emits, node_id, span, event, "emit statement")

    def get_emit(self, node_id: int) -> Optional[EventDef]:
        return self.emits.get(node_id)

    def add_function(
        self, node_id: int, span: Span, attributes: FunctionAttributes
    ) -> None:
        self._add(self.functions, node_id, span, attributes, "function")

    def get_function(self, node_id: int) -> Optional[FunctionAttributes]:
        return self.functions.get(node_id)

    def add_declaration(self, node_id: int, span: Span, typ: FixedSize) -> None:
        self._add(self.declarations, node_id, span, typ, "declaration")

    def get_declaration(self, node_id: int) -> Optional[FixedSize]:
        return self.declarations.get(node_id)

    def add_contract(
        self, node_id: int, span: Span, attributes: ContractAttributes
    ) -> None:
        self._add(self.contracts, node_id, span, attributes, "contract")

    def get_contract(self, node_id: int) -> Optional[ContractAttributes]:
        return self.contracts.get(node_id)

    def add_call(self, node_id: int, span: Span, call_type: CallType) -> None:
        self._add(self.calls, node_id, span, call_type, "call")

    def get_call(self, node_id: int) -> Optional[CallType]:
        return self.calls.get(node_id)

    def add_event(self, node_id: int, span: Span, event: EventDef) -> None:
        self._add(self.events, node_id, span, event, "event")

    def get_event(self, node_id: int) -> Optional[EventDef]:
        return self.events.get(node_id)

    def add_type_desc(self, node_id: int, span: Span, typ: Type) -> None:
        self._add(self.type_descs, node_id, span, typ, "type desc")

    def get_type_desc(self, node_id: int) -> Optional[Type]:
        return self.type_descs.get(node_id)

    def set_module(self, attributes: ModuleAttributes) -> None:
        self.module = attributes

    def get_module(self) -> Optional[ModuleAttributes]:
        return self.module

    def get_spanned_expressions(self) -> list:
        return self._spanned(self.expressions)

    def get_spanned_emits(self) -> list:
        return self._spanned(self.emits)

    def get_spanned_functions(self) -> list:
        return self._spanned(self.functions)

    def get_spanned_declarations(self) -> list:
        return self._spanned(self.declarations)

    def get_spanned_contracts(self) -> list:
        return self._spanned(self.contracts)

    def get_spanned_calls(self) -> list:
        return self._spanned(self.calls)

    def get_spanned_events(self) -> list:
        return self._spanned(self.events)

    def get_spanned_type_descs(self) -> list:
        return self._spanned(self.type_descs)

    def error(self, message: object, label_span: Span, label: object) -> None:
        self.fancy_error(message, [Label.primary(label_span, label)], [])

    def type_error(
        self, message: object, span: Span, expected: object, actual: object
    ) -> None:
        self.error(
            message,
            span,
            f"this has type `{actual}`; expected type `{expected}`",
        )

    def not_yet_implemented(self, feature: object, span: Span) -> None:
        self.error(
            "feature not yet implemented", span, f"{feature} is not yet implemented"
        )

    def fancy_error(
        self, message: object, labels: Iterable[Label], notes: Iterable[str]
    ) -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                message=str(message),
                labels=list(labels),
                notes=list(notes),
                code=None,
                file_id=self.file_id,
            )
        )

    def make_unique_name(self, name: str) -> str:
        """A unique name built from ``name``, kept as readable as possible."""
        fresh = self._fresh_id
        self._fresh_id += 1
        return f"${name}_{fresh}"