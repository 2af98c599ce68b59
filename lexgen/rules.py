import json
import string
from typing import Any, List, Tuple

RulePair = Tuple[str, str]


def any_of(chars: str) -> str:
    return "({})".format("|".join(chars))


LETTER = any_of(string.ascii_lowercase + string.ascii_uppercase)
DIGIT = any_of(string.digits)

C_LIKE_RULES: List[RulePair] = [
    ("KEYWORD_IF", "if"),
    ("KEYWORD_ELSE", "else"),
    ("KEYWORD_WHILE", "while"),
    ("KEYWORD_FOR", "for"),
    ("KEYWORD_INT", "int"),
    ("KEYWORD_FLOAT", "float"),
    ("KEYWORD_RETURN", "return"),
    ("IDENTIFIER", "{}({}|{})*".format(LETTER, LETTER, DIGIT)),
    ("NUMBER", "{}{}*".format(DIGIT, DIGIT)),
    ("PLUS", "+"),
    ("MINUS", "-"),
    ("MULTIPLY", "\\*"),
    ("DIVIDE", "/"),
    ("ASSIGN", "="),
    ("LESS_THAN", "<"),
    ("GREATER_THAN", ">"),
    ("SEMICOLON", ";"),
    ("LPAREN", "\\("),
    ("RPAREN", "\\)"),
    ("LBRACE", "{"),
    ("RBRACE", "}"),
]

PRESETS = {
    "c": C_LIKE_RULES,
}


def parse_rule(item: Any) -> RulePair:
    if isinstance(item, dict):
        name, pattern = item.get("name"), item.get("pattern")
    elif isinstance(item, list) and len(item) == 2:
        name, pattern = item
    else:
        raise ValueError("Invalid rule: {!r}".format(item))
    if not isinstance(name, str) or not isinstance(pattern, str):
        raise ValueError("Invalid rule: {!r}".format(item))
    return name, pattern


def load_rules(path: str) -> List[RulePair]:
    with open(path) as fp:
        try:
            data = json.load(fp)
        except json.JSONDecodeError as e:
            raise ValueError("{}: invalid JSON: {}".format(path, e)) from e
    if not isinstance(data, list):
        raise ValueError("{}: expected a list of rules".format(path))
    try:
        return [parse_rule(item) for item in data]
    except ValueError as e:
        raise ValueError("{}: {}".format(path, e)) from e
