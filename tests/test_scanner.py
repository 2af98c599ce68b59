import pytest

from lexgen import Token, make_lexer, scan


def tokenize(rules, text):
    errors = []

    def on_error(line, column):
        errors.append((line, column))

    tokens = scan(make_lexer(rules), text, on_error)
    return [tuple(token) for token in tokens], errors


def test_single_symbol():
    rules = [("A", "a")]
    assert tokenize(rules, "a") == ([("A", "a", 1, 1)], [])
    assert tokenize(rules, "aa") == (
        [("A", "a", 1, 1), ("A", "a", 1, 2)], []
    )
    assert tokenize(rules, "b") == ([], [(1, 1)])


def test_alternation():
    assert tokenize([("AB", "a|b")], "ab") == (
        [("AB", "a", 1, 1), ("AB", "b", 1, 2)], []
    )


def test_star_does_not_emit_empty_tokens():
    rules = [("STAR", "a*")]
    assert tokenize(rules, "") == ([], [])
    assert tokenize(rules, "aaa") == ([("STAR", "aaa", 1, 1)], [])
    assert tokenize(rules, "b") == ([], [(1, 1)])


def test_priority_and_maximal_munch():
    rules = [("IF", "if"), ("ID", "(i|f|x)(i|f|x)*")]
    assert tokenize(rules, "if") == ([("IF", "if", 1, 1)], [])
    assert tokenize(rules, "ifx") == ([("ID", "ifx", 1, 1)], [])


def test_priority_follows_declaration_order():
    rules = [("ID", "(i|f|x)(i|f|x)*"), ("IF", "if")]
    assert tokenize(rules, "if") == ([("ID", "if", 1, 1)], [])


def test_numbers_and_plus():
    rules = [("NUM", "(0|1)(0|1)*"), ("PLUS", "+")]
    assert tokenize(rules, "10+1") == ([
        ("NUM", "10", 1, 1), ("PLUS", "+", 1, 3), ("NUM", "1", 1, 4)
    ], [])


def test_group_star_then_symbol():
    rules = [("G", "(a|b)*c")]
    assert tokenize(rules, "abbac") == ([("G", "abbac", 1, 1)], [])
    assert tokenize(rules, "abba") == (
        [], [(1, 1), (1, 2), (1, 3), (1, 4)]
    )


def test_backtracks_to_last_accept():
    rules = [("ABC", "abc"), ("A", "a")]
    assert tokenize(rules, "abd") == (
        [("A", "a", 1, 1)], [(1, 2), (1, 3)]
    )
    assert tokenize(rules, "abca") == (
        [("ABC", "abc", 1, 1), ("A", "a", 1, 4)], []
    )


def test_whitespace_is_skipped_silently():
    rules = [("ID", "(a|b)(a|b)*")]
    assert tokenize(rules, "ab\n\tb a") == ([
        ("ID", "ab", 1, 1), ("ID", "b", 2, 2), ("ID", "a", 2, 4)
    ], [])


def test_lexeme_spanning_lines():
    rules = [("NL", "a\nb"), ("C", "c")]
    assert tokenize(rules, "a\nbc\nc") == ([
        ("NL", "a\nb", 1, 1), ("C", "c", 2, 2), ("C", "c", 3, 1)
    ], [])


def test_error_position_after_newline():
    assert tokenize([("A", "a")], "a\n?a") == (
        [("A", "a", 1, 1), ("A", "a", 2, 2)], [(2, 1)]
    )


def test_non_octet_input_is_a_lexical_error():
    assert tokenize([("A", "a")], "a€a") == (
        [("A", "a", 1, 1), ("A", "a", 1, 3)], [(1, 2)]
    )


def test_default_error_sink(capsys):
    tokens = scan(make_lexer([("A", "a")]), "a;a")
    assert tokens == [Token("A", "a", 1, 1), Token("A", "a", 1, 3)]
    assert capsys.readouterr().err == "Lexical error at line 1, column 2\n"


@pytest.mark.parametrize("text", ["aab", "aba", "abab", "bbbb", "aaaaab"])
def test_maximal_munch_against_brute_force(text):
    rules = [("A", "a"), ("AB", "ab"), ("ABS", "a(b|a)*b"), ("B", "b")]
    dfa = make_lexer(rules)
    pos = 0
    for token in scan(dfa, text):
        matches = [
            end for end in range(pos + 1, len(text) + 1)
            if dfa.matches(text[pos:end])
        ]
        assert pos + len(token.lexeme) == max(matches)
        pos += len(token.lexeme)
    assert pos == len(text)
