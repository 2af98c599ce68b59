from .codegen import (
    TARGETS, generate_cpp, generate_dot, generate_python, write_scanner
)
from .dfa import DEFAULT_MAX_STATES, Dfa, make_dfa
from .display import format_dfa, format_nfa
from .errors import BuildError
from .generator import LexerGenerator, Rule, make_lexer
from .nfa import Nfa, Tag, combine_nfas, nfa_from_postfix, nfa_from_regex
from .regex import explicit_concat, to_postfix, validate
from .rules import C_LIKE_RULES, load_rules
from .scanner import Token, scan

__all__ = [
    "TARGETS", "generate_cpp", "generate_dot", "generate_python",
    "write_scanner", "DEFAULT_MAX_STATES", "Dfa", "make_dfa", "format_dfa",
    "format_nfa", "BuildError", "LexerGenerator", "Rule", "make_lexer", "Nfa",
    "Tag", "combine_nfas", "nfa_from_postfix", "nfa_from_regex",
    "explicit_concat", "to_postfix", "validate", "C_LIKE_RULES",
    "load_rules", "Token", "scan"
]
