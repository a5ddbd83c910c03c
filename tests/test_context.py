import pytest

from fe_analyzer.builtins import GlobalMethod
from fe_analyzer.context import (
    BuiltinFunction,
    Context,
    ContractAttributes,
    ExpressionAttributes,
    Location,
    LocationKind,
    ModuleAttributes,
    SelfAttribute,
    TypeConstructor,
)
from fe_analyzer.errors import CannotMove, Label, Severity, Span
from fe_analyzer.events import EventDef
from fe_analyzer.scopes import BlockScope, ContractScope, ModuleScope
from fe_analyzer.types import (
    Array,
    Contract,
    FeString,
    FunctionAttributes,
    Integer,
    Map,
    Primitive,
    Struct,
    Tuple,
)


@pytest.mark.parametrize(
    "typ, expected",
    [
        (Integer.U256, Location.VALUE),
        (Primitive.BOOL, Location.VALUE),
        (Contract("Foo"), Location.VALUE),
        (Array(10, Integer.U8), Location.MEMORY),
        (Tuple((Integer.U8, Primitive.BOOL)), Location.MEMORY),
        (FeString(26), Location.MEMORY),
        (Struct("House"), Location.MEMORY),
    ],
)
def test_assign_location(typ, expected):
    assert Location.assign_location(typ) == expected


def test_storage_location_keeps_nonce():
    location = Location.storage(3)
    assert location.kind is LocationKind.STORAGE
    assert location.nonce == 3
    assert Location.storage().nonce is None


def test_non_storage_location_rejects_nonce():
    with pytest.raises(ValueError):
        Location(LocationKind.MEMORY, 1)


def test_into_cloned_moves_to_memory():
    attrs = ExpressionAttributes(Array(2, Integer.U256), Location.storage(0))
    cloned = attrs.into_cloned()
    assert cloned.move_location == Location.MEMORY
    assert cloned.final_location() == Location.MEMORY
    assert attrs.final_location() == Location.storage(0)


def test_into_loaded_from_storage_moves_to_value():
    attrs = ExpressionAttributes(Integer.U256, Location.storage(1))
    loaded = attrs.into_loaded()
    assert loaded.move_location == Location.VALUE
    assert loaded.final_location() == Location.VALUE


def test_into_loaded_of_value_adds_no_move():
    attrs = ExpressionAttributes(Primitive.BOOL, Location.VALUE)
    loaded = attrs.into_loaded()
    assert loaded.move_location is None
    assert loaded.final_location() == Location.VALUE


@pytest.mark.parametrize(
    "typ",
    [Array(2, Integer.U256), FeString(10), Map(Integer.U256, Primitive.BOOL)],
)
def test_into_loaded_rejects_non_value_types(typ):
    with pytest.raises(CannotMove):
        ExpressionAttributes(typ, Location.MEMORY).into_loaded()


def _contract_scope():
    module = ModuleScope()
    own = Contract("Foo")
    other = Contract("Bar")
    house = Struct("House", [("price", Integer.U256)])
    module.add_type_def("Foo", own)
    module.add_type_def("Bar", other)
    module.add_type_def("House", house)
    scope = ContractScope("Foo", module)
    for name, public in [("bar", True), ("hidden", False), ("__init__", True), ("baz", True)]:
        scope.add_function(
            name,
            public,
            [("x", Integer.U256)],
            Integer.U256,
            BlockScope.from_contract_scope(name, scope),
        )
    scope.add_event("MyEvent", EventDef("MyEvent", [("num", Integer.U256)]))
    scope.add_string("hello")
    scope.add_string("abc")
    scope.add_created_contract("Bar")
    scope.add_used_list_expression(Array(3, Integer.U256))
    return scope, own, other, house


def test_contract_attributes_from_scope():
    scope, own, other, house = _contract_scope()
    attrs = ContractAttributes.from_scope(scope)

    assert [f.name for f in attrs.public_functions] == ["bar", "baz"]
    assert attrs.init_function is not None
    assert attrs.init_function.name == "__init__"
    assert attrs.init_function.return_type is Primitive.UNIT
    assert attrs.init_function.param_names() == ["x"]
    assert attrs.external_contracts == [other]
    assert own not in attrs.external_contracts
    assert attrs.structs == [house]
    assert [e.name for e in attrs.events] == ["MyEvent"]
    assert attrs.string_literals == ["abc", "hello"]
    assert attrs.created_contracts == ["Bar"]
    assert attrs.list_expressions == [Array(3, Integer.U256)]


def test_module_attributes_from_scope():
    module = ModuleScope()
    module.add_type_def("b", Integer.U8)
    module.add_type_def("a", Primitive.BOOL)
    pair = Tuple((Integer.U8, Primitive.BOOL))
    module.tuples_used.add(pair)
    attrs = ModuleAttributes.from_scope(module)
    assert list(attrs.type_defs) == ["a", "b"]
    assert attrs.tuples_used == frozenset({pair})


def test_add_and_get_expression():
    context = Context()
    attrs = ExpressionAttributes(Integer.U256, Location.VALUE)
    context.add_expression(1, Span(0, 3), attrs)
    assert context.get_expression(1) == attrs
    assert context.get_expression(2) is None


def test_duplicate_expression_raises():
    context = Context()
    attrs = ExpressionAttributes(Integer.U256, Location.VALUE)
    context.add_expression(1, Span(0, 3), attrs)
    with pytest.raises(ValueError):
        context.add_expression(1, Span(0, 3), attrs)


def test_update_expression():
    context = Context()
    attrs = ExpressionAttributes(Integer.U256, Location.storage(0))
    context.add_expression(5, Span(2, 4), attrs)
    context.update_expression(5, attrs.into_loaded())
    assert context.get_expression(5).move_location == Location.VALUE


def test_update_missing_expression_raises():
    context = Context()
    with pytest.raises(KeyError):
        context.update_expression(9, ExpressionAttributes(Integer.U8, Location.VALUE))


def test_spanned_expressions_follow_visit_order():
    context = Context()
    first = ExpressionAttributes(Integer.U8, Location.VALUE)
    second = ExpressionAttributes(Primitive.BOOL, Location.VALUE)
    context.add_expression(7, Span(10, 12), first)
    context.add_declaration(3, Span(5, 8), Integer.U8)
    context.add_expression(2, Span(0, 4), second)
    assert context.get_spanned_expressions() == [
        (Span(10, 12), first),
        (Span(0, 4), second),
    ]
    assert context.get_spanned_declarations() == [(Span(5, 8), Integer.U8)]


def test_other_attribute_tables():
    context = Context()
    event = EventDef("Signed", [("book", Integer.U256)])
    function = FunctionAttributes(True, "bar", [], Integer.U256)
    contract_attrs = ContractAttributes()
    call = BuiltinFunction(GlobalMethod.KECCAK256)

    context.add_emit(1, Span(0, 1), event)
    context.add_function(2, Span(1, 2), function)
    context.add_contract(3, Span(2, 3), contract_attrs)
    context.add_call(4, Span(3, 4), call)
    context.add_event(5, Span(4, 5), event)
    context.add_type_desc(6, Span(5, 6), Integer.U8)

    assert context.get_emit(1) == event
    assert context.get_function(2) == function
    assert context.get_contract(3) == contract_attrs
    assert context.get_call(4) == call
    assert context.get_event(5) == event
    assert context.get_type_desc(6) is Integer.U8
    assert context.get_spanned_emits() == [(Span(0, 1), event)]
    assert context.get_spanned_functions() == [(Span(1, 2), function)]
    assert context.get_spanned_contracts() == [(Span(2, 3), contract_attrs)]
    assert context.get_spanned_calls() == [(Span(3, 4), call)]
    assert context.get_spanned_events() == [(Span(4, 5), event)]
    assert context.get_spanned_type_descs() == [(Span(5, 6), Integer.U8)]
    with pytest.raises(ValueError):
        context.add_call(4, Span(3, 4), SelfAttribute("bar"))


def test_call_types_compare_by_value():
    assert TypeConstructor(Integer.U8) == TypeConstructor(Integer.U8)
    assert SelfAttribute("f") != SelfAttribute("g")


def test_module_attributes_set_and_get():
    context = Context()
    assert context.get_module() is None
    attrs = ModuleAttributes({"x": Integer.U8})
    context.set_module(attrs)
    assert context.get_module() == attrs


def test_error_records_diagnostic():
    context = Context(file_id=4)
    context.error("bad thing", Span(1, 5), "here")
    diagnostic = context.diagnostics[0]
    assert diagnostic.severity is Severity.ERROR
    assert diagnostic.message == "bad thing"
    assert diagnostic.labels == [Label.primary(Span(1, 5), "here")]
    assert diagnostic.notes == []
    assert diagnostic.file_id == 4


def test_type_error_label():
    context = Context()
    context.type_error("mismatch", Span(0, 2), Integer.U256, Integer.U8)
    label = context.diagnostics[0].labels[0]
    assert label.message == "this has type `u8`; expected type `u256`"


def test_not_yet_implemented():
    context = Context()
    context.not_yet_implemented("tuples", Span(3, 9))
    diagnostic = context.diagnostics[0]
    assert diagnostic.message == "feature not yet implemented"
    assert diagnostic.labels[0].message == "tuples is not yet implemented"


def test_fancy_error_keeps_labels_and_notes():
    context = Context()
    labels = [Label.primary(Span(0, 1), "a"), Label.primary(Span(2, 3), "b")]
    context.fancy_error("oops", labels, ["note one"])
    diagnostic = context.diagnostics[0]
    assert diagnostic.labels == labels
    assert diagnostic.notes == ["note one"]


def test_make_unique_name():
    context = Context()
    first = context.make_unique_name("foo")
    second = context.make_unique_name("foo")
    assert first == "$foo_0"
    assert first != second
    assert second.startswith("$foo_")