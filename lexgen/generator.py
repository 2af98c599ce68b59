import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .codegen import get_generator, write_scanner
from .dfa import DEFAULT_MAX_STATES, Dfa, make_dfa
from .nfa import Nfa, Tag, combine_nfas, nfa_from_regex
from .regex import validate
from .scanner import ErrorHandler, Token, report_error, scan

logger = logging.getLogger(__name__)


class Rule(NamedTuple):
    name: str
    pattern: str
    priority: int


class LexerGenerator:
    def __init__(self, max_states: Optional[int] = DEFAULT_MAX_STATES):
        self._max_states = max_states
        self._rules: List[Rule] = []
        self._nfa: Optional[Nfa] = None
        self._dfa: Optional[Dfa] = None

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    @property
    def nfa(self) -> Nfa:
        if self._nfa is None:
            raise RuntimeError("Lexer is not built")
        return self._nfa

    @property
    def dfa(self) -> Dfa:
        if self._dfa is None:
            raise RuntimeError("Lexer is not built")
        return self._dfa

    def add_rule(self, name: str, pattern: str) -> Rule:
        if not validate(pattern):
            raise ValueError(
                "Unbalanced parentheses in pattern {!r}".format(pattern)
            )
        for char in pattern:
            if ord(char) > 0xFF:
                raise ValueError(
                    "Pattern {!r} contains non-octet symbol {!r}".format(
                        pattern, char
                    )
                )
        rule = Rule(name, pattern, len(self._rules))
        self._rules.append(rule)
        return rule

    def build(self) -> Dfa:
        nfas: List[Nfa] = []
        for rule in self._rules:
            logger.debug("Processing: %s -> %s", rule.name, rule.pattern)
            nfas.append(
                nfa_from_regex(rule.pattern, Tag(rule.name, rule.priority))
            )

        nfa = combine_nfas(nfas)
        logger.debug(
            "Combined NFA: %d states, %d transitions",
            len(nfa.states), len(nfa.transitions)
        )
        dfa = make_dfa(nfa, self._max_states)
        logger.info(
            "Built DFA with %d states from %d rules",
            dfa.num_states, len(self._rules)
        )
        self._nfa = nfa
        self._dfa = dfa
        return dfa

    def tokenize(self, text: str,
                 on_error: ErrorHandler = report_error) -> List[Token]:
        return scan(self.dfa, text, on_error)

    def generate(self, target: str = "python") -> str:
        return get_generator(target)(self.dfa)

    def write(self, filename: str, target: str = "python") -> bool:
        return write_scanner(self.dfa, filename, target)


def make_lexer(
        rules: Sequence[Tuple[str, str]],
        max_states: Optional[int] = DEFAULT_MAX_STATES) -> Dfa:
    generator = LexerGenerator(max_states)
    for name, pattern in rules:
        generator.add_rule(name, pattern)
    return generator.build()
