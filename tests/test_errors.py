import pytest

from fe_analyzer.errors import (
    AnalyzerError,
    Diagnostic,
    ErrorKind,
    Label,
    SemanticError,
    Severity,
    Span,
)


@pytest.mark.parametrize(
    "factory, kind",
    [
        (SemanticError.fatal, ErrorKind.FATAL),
        (SemanticError.not_subscriptable, ErrorKind.NOT_SUBSCRIPTABLE),
        (SemanticError.signed_exponent_not_allowed, ErrorKind.SIGNED_EXPONENT_NOT_ALLOWED),
        (SemanticError.type_error, ErrorKind.TYPE_ERROR),
    ],
)
def test_factories_set_kind_and_empty_context(factory, kind):
    err = factory()
    assert err.kind is kind
    assert err.context == []


def test_with_context_appends_in_order():
    inner = Span(2, 5)
    outer = Span(0, 8)
    err = SemanticError.type_error().with_context(inner).with_context(outer)
    assert err.context == [inner, outer]


def test_equality_compares_kind_and_context():
    a = SemanticError.type_error().with_context(Span(1, 2))
    b = SemanticError.type_error().with_context(Span(1, 2))
    c = SemanticError.not_subscriptable().with_context(Span(1, 2))
    assert a == b
    assert not (a == c)


def test_error_can_be_raised_and_caught():
    err = SemanticError.signed_exponent_not_allowed().with_context(Span(1, 2))
    with pytest.raises(SemanticError) as info:
        raise err
    assert info.value.kind is ErrorKind.SIGNED_EXPONENT_NOT_ALLOWED
    assert info.value.context == [Span(1, 2)]


def test_format_user_without_context():
    err = SemanticError.type_error()
    assert err.format_user("anything") == "TypeError on line 0\nno error context available"


def test_format_user_with_single_span():
    src = "a\nbcd\nef"
    err = SemanticError.not_subscriptable().with_context(Span(6, 8))
    assert err.format_user(src) == "NotSubscriptable on line 2\nef"


def test_format_user_with_nested_spans_highlights_inner():
    src = "a\nbcd\nef"
    err = SemanticError.type_error().with_context(Span(2, 5)).with_context(Span(0, 8))
    expected_context = src[0:2] + "\x1b[31m" + src[2:5] + "\x1b[0m" + src[5:8]
    result = err.format_user(src)
    header, _, body = result.partition("\n")
    assert header.startswith("TypeError on line")
    assert body == expected_context


def test_format_user_line_of_span_on_first_line():
    err = SemanticError.fatal().with_context(Span(0, 3))
    assert err.format_user("abc\ndef") == "Fatal on line 0\nabc"


def test_label_primary():
    span = Span(3, 7)
    label = Label.primary(span, "this has an error")
    assert label.span == span
    assert label.message == "this has an error"
    assert label.is_primary is True


def test_analyzer_error_holds_diagnostics_and_classic():
    diag = Diagnostic(
        severity=Severity.ERROR,
        message="feature not yet implemented",
        labels=[Label.primary(Span(0, 1), "x")],
    )
    classic = SemanticError.type_error()
    err = AnalyzerError([diag], classic)
    assert err.diagnostics == [diag]
    assert err.classic is classic
    assert diag.notes == []
    assert diag.code is None


def test_span_ordering():
    assert sorted([Span(5, 6), Span(1, 9), Span(1, 2)]) == [Span(1, 2), Span(1, 9), Span(5, 6)]