import pytest

from lexgen import (
    C_LIKE_RULES, BuildError, LexerGenerator, Rule, Tag, format_dfa,
    format_nfa
)


@pytest.fixture
def c_lexer():
    generator = LexerGenerator()
    for name, pattern in C_LIKE_RULES:
        generator.add_rule(name, pattern)
    generator.build()
    return generator


def test_add_rule_assigns_priorities():
    generator = LexerGenerator()
    assert generator.add_rule("A", "a") == Rule("A", "a", 0)
    assert generator.add_rule("B", "b") == Rule("B", "b", 1)
    assert generator.add_rule("A", "c") == Rule("A", "c", 2)
    assert [rule.priority for rule in generator.rules] == [0, 1, 2]


@pytest.mark.parametrize("pattern", ["(a", "a)", ")("])
def test_add_rule_rejects_unbalanced(pattern):
    generator = LexerGenerator()
    with pytest.raises(ValueError):
        generator.add_rule("A", pattern)
    assert generator.rules == []


def test_add_rule_rejects_non_octet():
    with pytest.raises(ValueError):
        LexerGenerator().add_rule("EURO", "€")


def test_build_without_rules():
    generator = LexerGenerator()
    with pytest.raises(BuildError):
        generator.build()
    with pytest.raises(RuntimeError):
        generator.dfa


def test_use_before_build():
    generator = LexerGenerator()
    generator.add_rule("A", "a")
    with pytest.raises(RuntimeError):
        generator.tokenize("a")
    with pytest.raises(RuntimeError):
        generator.generate()


def test_state_cap():
    generator = LexerGenerator(max_states=3)
    generator.add_rule("N", "(a|b)*a(a|b)(a|b)")
    with pytest.raises(BuildError):
        generator.build()


def test_duplicate_names():
    generator = LexerGenerator()
    generator.add_rule("OP", "+")
    generator.add_rule("OP", "-")
    generator.build()
    assert [token.type for token in generator.tokenize("+-")] == ["OP", "OP"]


def test_c_like_tokens(c_lexer):
    tokens = c_lexer.tokenize("int x = 10;\nwhile (x) { x = x * 2; }")
    assert [tuple(token) for token in tokens] == [
        ("KEYWORD_INT", "int", 1, 1),
        ("IDENTIFIER", "x", 1, 5),
        ("ASSIGN", "=", 1, 7),
        ("NUMBER", "10", 1, 9),
        ("SEMICOLON", ";", 1, 11),
        ("KEYWORD_WHILE", "while", 2, 1),
        ("LPAREN", "(", 2, 7),
        ("IDENTIFIER", "x", 2, 8),
        ("RPAREN", ")", 2, 9),
        ("LBRACE", "{", 2, 11),
        ("IDENTIFIER", "x", 2, 13),
        ("ASSIGN", "=", 2, 15),
        ("IDENTIFIER", "x", 2, 17),
        ("MULTIPLY", "*", 2, 19),
        ("NUMBER", "2", 2, 21),
        ("SEMICOLON", ";", 2, 22),
        ("RBRACE", "}", 2, 24),
    ]


def test_c_like_keyword_prefixes(c_lexer):
    tokens = c_lexer.tokenize("if iffy returned for4")
    assert [(token.type, token.lexeme) for token in tokens] == [
        ("KEYWORD_IF", "if"),
        ("IDENTIFIER", "iffy"),
        ("IDENTIFIER", "returned"),
        ("IDENTIFIER", "for4"),
    ]


def test_generate(c_lexer):
    assert "class Lexer:" in c_lexer.generate()
    assert "class LexicalAnalyzer {" in c_lexer.generate("cpp")
    with pytest.raises(ValueError):
        c_lexer.generate("rust")


def test_write(c_lexer, tmp_path):
    path = tmp_path / "c_lexer.py"
    assert c_lexer.write(str(path))
    assert path.read_text() == c_lexer.generate()


def test_format_nfa():
    generator = LexerGenerator()
    generator.add_rule("A", "a")
    generator.add_rule("B", "b*")
    generator.build()
    text = format_nfa(generator.nfa)
    assert "Start State: 0" in text
    assert "State 0 --ε--> State 1" in text
    assert "State 1 --a--> State 2" in text
    assert "2 -> A(0)" in text
    assert "States: 7" in text


def test_format_dfa():
    generator = LexerGenerator()
    generator.add_rule("A", "a")
    generator.add_rule("B", "b*")
    dfa = generator.build()
    text = format_dfa(dfa)
    lines = text.splitlines()
    assert "Alphabet: { 'a' 'b' }" in lines
    assert "State".rjust(10) + "a".rjust(10) + "b".rjust(10) in lines
    assert "0".rjust(10) + "1".rjust(10) + "2".rjust(10) in lines
    assert "1".rjust(10) + "-".rjust(10) + "-".rjust(10) in lines
    assert "  0 -> {}".format("B(1)") in lines
    assert dfa.get_tag(0) == Tag("B", 1)
