from typing import Optional

from .codegen import Buffer
from .dfa import Dfa
from .nfa import Nfa, Tag

RULE = "=" * 35
CELL = 10


def fmt_symbol(symbol: Optional[int]) -> str:
    if symbol is None:
        return "ε"
    if 0x20 < symbol < 0x7F:
        return chr(symbol)
    return "0x{:02X}".format(symbol)


def fmt_tag(tag: Tag) -> str:
    return "{}({})".format(tag.name, tag.priority)


def format_nfa(nfa: Nfa) -> str:
    buf = Buffer(2)
    buf.line("NFA Structure")
    buf.line(RULE)
    buf.line("Start State: {}", nfa.start)
    buf.line("Accepting States:")
    with buf.indent():
        for state, tag in sorted(nfa.accepts.items()):
            buf.line("{} -> {}", state, fmt_tag(tag))
    buf.line("States: {}", len(nfa.states))
    buf.line("Transitions:")
    with buf.indent():
        for source, symbol, target in nfa.transitions:
            buf.line(
                "State {} --{}--> State {}", source, fmt_symbol(symbol), target
            )
    buf.line(RULE)
    return buf.getvalue()


def format_dfa(dfa: Dfa) -> str:
    buf = Buffer(2)
    buf.line("DFA Structure")
    buf.line(RULE)
    buf.line("Start State: {}", dfa.start)
    buf.line("Accepting States:")
    with buf.indent():
        for state, tag in sorted(dfa.accepts.items()):
            buf.line("{} -> {}", state, fmt_tag(tag))
    buf.line(
        "Alphabet: {{ {} }}",
        " ".join("'{}'".format(fmt_symbol(c)) for c in dfa.alphabet)
    )
    buf.line("States: {}", dfa.num_states)
    buf.line("Transition Table:")
    buf.line(
        "State".rjust(CELL) +
        "".join(fmt_symbol(c).rjust(CELL) for c in dfa.alphabet)
    )
    buf.line("-" * (CELL * (len(dfa.alphabet) + 1)))
    for state, row in dfa.iter_states():
        cells = [str(state).rjust(CELL)]
        for symbol in dfa.alphabet:
            target = row.get(symbol)
            cell = "-" if target is None else str(target)
            cells.append(cell.rjust(CELL))
        buf.line("".join(cells))
    buf.line(RULE)
    return buf.getvalue()
