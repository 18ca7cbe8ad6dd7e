import pytest

from lispy.reader.parser import NodeKind, TokenStream, lex, parse
from lispy.reader.reader import read, read_str
from lispy.types.errors import ErrorKind, LispySyntaxError
from lispy.types.value import INT_MAX, INT_MIN, LispError, Number, QExpr, SExpr, Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("42", [("number", "42")]),
        ("-42", [("number", "-42")]),
        ("-", [("symbol", "-")]),
        ("5a", [("symbol", "5a")]),
        ("(+ 1 {a})", [("lparen", "("), ("symbol", "+"), ("number", "1"), ("lbrace", "{"),
                       ("symbol", "a"), ("rbrace", "}"), ("rparen", ")")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("head ; trailing", [("symbol", "head")]),
        ("<= == !x &rest a_b \\", [("symbol", "<="), ("symbol", "=="), ("symbol", "!x"),
                                  ("symbol", "&rest"), ("symbol", "a_b"), ("symbol", "\\")]),
        ("", []),
    ],
)
def test_lexer_basic(source, expected):
    tokens = [(kind, text) for kind, text, _ in lex(source)]
    assert tokens == expected


def test_lexer_reports_offsets():
    assert [pos for _, _, pos in lex("(+ 1 {a})")] == [0, 1, 3, 5, 6, 7, 8]


def test_lexer_rejects_unknown_character():
    with pytest.raises(LispySyntaxError) as exc_info:
        list(lex("(+ 1\n  #)"))
    exc = exc_info.value
    assert (exc.line, exc.column) == (2, 3)
    assert str(exc) == "<stdin>:2:3: error: unexpected character '#'"


def test_parse_builds_tree():
    root = parse("(+ 1 2) {x}")
    assert root.kind is NodeKind.ROOT
    assert [c.kind for c in root.children] == [NodeKind.SEXPR, NodeKind.QEXPR]
    sexpr = root.children[0]
    assert [c.kind for c in sexpr.children] == [NodeKind.SYMBOL, NodeKind.NUMBER, NodeKind.NUMBER]
    assert [c.contents for c in sexpr.children] == ["+", "1", "2"]
    assert root.children[1].children[0].contents == "x"
    assert (root.children[1].line, root.children[1].column) == (1, 9)


def test_parse_all_streams_expressions():
    stream = TokenStream("a (b) {c}")
    kinds = [node.kind for node in stream.parse_all()]
    assert kinds == [NodeKind.SYMBOL, NodeKind.SEXPR, NodeKind.QEXPR]


@pytest.mark.parametrize(
    "source,message",
    [
        ("(+ 1", "expected ')' at end of input"),
        ("{1 2", "expected '}' at end of input"),
        ("(+ 1}", "expected ')' but found '}'"),
        (")", "unexpected ')'"),
        ("1 }", "unexpected '}'"),
    ],
)
def test_parse_errors(source, message):
    with pytest.raises(LispySyntaxError) as exc_info:
        parse(source)
    assert exc_info.value.message == message


def test_parse_error_carries_filename():
    with pytest.raises(LispySyntaxError) as exc_info:
        parse("(", filename="prelude.lspy")
    assert str(exc_info.value) == "prelude.lspy:1:2: error: expected ')' at end of input"


def test_read_converts_tree_to_values():
    value = read_str("{1 (a -2)} b")
    assert value == SExpr([
        QExpr([Number(1), SExpr([Symbol("a"), Number(-2)])]),
        Symbol("b"),
    ])


def test_read_empty_input_is_empty_sexpr():
    assert read(parse("")) == SExpr()


@pytest.mark.parametrize("literal", [str(INT_MAX), str(INT_MIN)])
def test_read_number_limits(literal):
    assert read_str(literal) == SExpr([Number(int(literal))])


@pytest.mark.parametrize("literal", [str(INT_MAX + 1), str(INT_MIN - 1), "1" * 40])
def test_read_out_of_range_number_is_error_value(literal):
    value = read_str(literal)
    err = value[0]
    assert isinstance(err, LispError)
    assert err.kind is ErrorKind.INVALID_NUMBER
    assert str(err) == "Error: invalid number"


def test_deep_nesting_parses_without_recursion():
    depth = 5000
    root = parse("{" * depth + "x" + "}" * depth)
    node = root.children[0]
    for _ in range(depth - 1):
        assert node.kind is NodeKind.QEXPR
        node = node.children[0]
    assert node.children[0].contents == "x"


def test_deep_nesting_reports_innermost_unclosed_group():
    with pytest.raises(LispySyntaxError) as exc_info:
        parse("(" * 3000 + "{")
    assert exc_info.value.message == "expected '}' at end of input"
