"""Unit tests for parameter-name and type inlay hints."""

from lsprotocol import types

from vintlang.lsp.features.inlay_hints.inlay_hints import infer_type, resolve_inlay_hints


def lines_range(first, last, end_character=200):
    return types.Range(
        start=types.Position(line=first, character=0),
        end=types.Position(line=last, character=end_character),
    )


def summary(hints):
    return [(h.position.line, h.position.character, h.label, h.kind) for h in hints]


def test_literal_shapes():
    assert infer_type(' "a" // note') == "string", "Trailing comments should be ignored"
    assert infer_type("'a'") == "string"
    assert infer_type(" 42") == "int"
    assert infer_type("-3") == "int", "Negative numbers are ints"
    assert infer_type("3.14") == "float"
    assert infer_type("false") == "bool"
    assert infer_type("[1, 2]") == "array"
    assert infer_type("{}") == "map"
    assert infer_type("func(a) {") == "function", "A func literal is a function"


def test_unrecognised_shape():
    assert infer_type("compute()") is None, "Call results are not inferred"
    assert infer_type("other") is None
    assert infer_type("") is None


def test_type_hints(hints_context):
    hints = resolve_inlay_hints(hints_context, lines_range(0, 7))

    assert summary(hints) == [
        (0, 8, ": string", types.InlayHintKind.Type),
        (1, 9, ": int", types.InlayHintKind.Type),
        (2, 9, ": float", types.InlayHintKind.Type),
        (3, 8, ": bool", types.InlayHintKind.Type),
        (4, 9, ": array", types.InlayHintKind.Type),
        (5, 8, ": map", types.InlayHintKind.Type),
        (6, 6, ": function", types.InlayHintKind.Type),
    ]


def test_parameter_hints(hints_context):
    hints = resolve_inlay_hints(hints_context, lines_range(8, 9))

    assert summary(hints) == [
        (8, 21, "text:", types.InlayHintKind.Parameter),
        (8, 27, "old:", types.InlayHintKind.Parameter),
        (8, 32, "new:", types.InlayHintKind.Parameter),
    ]
    assert all(h.padding_right for h in hints), "Parameter hints should be padded on the right"


def test_only_hints_inside_range(hints_context):
    hints = resolve_inlay_hints(hints_context, lines_range(8, 8, end_character=25))
    assert [h.label for h in hints] == ["text:"]


def test_comment_lines_have_no_hints(hints_context):
    assert resolve_inlay_hints(hints_context, lines_range(10, 10)) == []


def test_range_past_document_end(hints_context):
    assert resolve_inlay_hints(hints_context, lines_range(50, 60)) == [], "A range past the end has no hints"


def test_naive_comma_split(make_context):
    context = make_context('split("a,b", ",")')

    hints = resolve_inlay_hints(context, lines_range(0, 0))

    assert [(h.position.character, h.label) for h in hints] == [(6, "text:"), (9, "separator:")]
