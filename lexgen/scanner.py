import sys
from typing import Callable, List, NamedTuple, Optional

from .dfa import Dfa

ErrorHandler = Callable[[int, int], None]

WHITESPACE = " \t\n"


class Token(NamedTuple):
    type: str
    lexeme: str
    line: int
    column: int


def report_error(line: int, column: int) -> None:
    print(
        "Lexical error at line {}, column {}".format(line, column),
        file=sys.stderr
    )


def match_once(dfa: Dfa, text: str, pos: int) -> Optional[Token]:
    """Longest match starting at ``pos``; line and column are left zero."""
    state = dfa.start
    last_pos = -1
    last_type: Optional[str] = None
    for i in range(pos, len(text)):
        target = dfa.next_state(state, ord(text[i]))
        if target is None:
            break
        state = target
        tag = dfa.get_tag(state)
        if tag is not None:
            last_pos = i
            last_type = tag.name
    if last_type is None:
        return None
    return Token(last_type, text[pos:last_pos + 1], 0, 0)


def scan(dfa: Dfa, text: str,
         on_error: ErrorHandler = report_error) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    line = 1
    column = 1
    while pos < len(text):
        match = match_once(dfa, text, pos)
        if match is not None:
            tokens.append(match._replace(line=line, column=column))
            end = pos + len(match.lexeme)
        else:
            if text[pos] not in WHITESPACE:
                on_error(line, column)
            end = pos + 1
        for char in text[pos:end]:
            if char == "\n":
                line += 1
                column = 1
            else:
                column += 1
        pos = end
    return tokens
