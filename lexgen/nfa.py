from collections import defaultdict
from typing import (
    DefaultDict, Dict, FrozenSet, Iterable, List, NamedTuple, Optional,
    Sequence, Set, Tuple
)

from .errors import BuildError
from .regex import atom_symbol, is_operator, postfix_atoms, to_postfix

EPSILON = None

Symbol = Optional[int]


class Tag(NamedTuple):
    name: str
    priority: int


class NfaTransition(NamedTuple):
    source: int
    symbol: Symbol
    target: int


class Nfa:
    def __init__(self, num_states: int, start: int,
                 transitions: Iterable[NfaTransition],
                 accepts: Dict[int, Tag]):
        self._num_states = num_states
        self._start = start
        self._transitions = tuple(transitions)
        self._accepts = dict(accepts)
        self._epsilon: DefaultDict[int, List[int]] = defaultdict(list)
        self._moves: DefaultDict[Tuple[int, int], List[int]] = \
            defaultdict(list)
        for source, symbol, target in self._transitions:
            if symbol is EPSILON:
                self._epsilon[source].append(target)
            else:
                self._moves[(source, symbol)].append(target)

    @property
    def states(self) -> range:
        return range(self._num_states)

    @property
    def start(self) -> int:
        return self._start

    @property
    def transitions(self) -> Tuple[NfaTransition, ...]:
        return self._transitions

    @property
    def accepts(self) -> Dict[int, Tag]:
        return dict(self._accepts)

    def get_tag(self, state: int) -> Optional[Tag]:
        return self._accepts.get(state)

    def alphabet(self) -> List[int]:
        return sorted({
            symbol for _, symbol, _ in self._transitions
            if symbol is not EPSILON
        })

    def epsilon_closure(self, states: Iterable[int]) -> FrozenSet[int]:
        closure: Set[int] = set(states)
        stack = list(closure)
        while stack:
            state = stack.pop()
            for target in self._epsilon.get(state, ()):
                if target not in closure:
                    closure.add(target)
                    stack.append(target)
        return frozenset(closure)

    def move(self, states: Iterable[int], symbol: int) -> FrozenSet[int]:
        result: Set[int] = set()
        for state in states:
            result.update(self._moves.get((state, symbol), ()))
        return frozenset(result)

    def matches(self, text: str) -> bool:
        current = self.epsilon_closure([self._start])
        for char in text:
            current = self.epsilon_closure(self.move(current, ord(char)))
            if not current:
                return False
        return any(state in self._accepts for state in current)


class Fragment(NamedTuple):
    start: int
    accept: int


class NfaBuilder:
    def __init__(self) -> None:
        self._num_states = 0
        self._transitions: List[NfaTransition] = []

    def new_state(self) -> int:
        state = self._num_states
        self._num_states += 1
        return state

    def connect(self, source: int, symbol: Symbol, target: int) -> None:
        self._transitions.append(NfaTransition(source, symbol, target))

    def empty(self) -> Fragment:
        return Fragment(self.new_state(), self.new_state())

    def symbol(self, code: int) -> Fragment:
        fragment = self.empty()
        self.connect(fragment.start, code, fragment.accept)
        return fragment

    def concat(self, left: Fragment, right: Fragment) -> Fragment:
        self.connect(left.accept, EPSILON, right.start)
        return Fragment(left.start, right.accept)

    def alternation(self, left: Fragment, right: Fragment) -> Fragment:
        start, accept = self.new_state(), self.new_state()
        self.connect(start, EPSILON, left.start)
        self.connect(start, EPSILON, right.start)
        self.connect(left.accept, EPSILON, accept)
        self.connect(right.accept, EPSILON, accept)
        return Fragment(start, accept)

    def star(self, inner: Fragment) -> Fragment:
        start, accept = self.new_state(), self.new_state()
        self.connect(start, EPSILON, inner.start)
        self.connect(start, EPSILON, accept)
        self.connect(inner.accept, EPSILON, inner.start)
        self.connect(inner.accept, EPSILON, accept)
        return Fragment(start, accept)

    def build(self, fragment: Fragment, tag: Tag) -> Nfa:
        return Nfa(
            self._num_states, fragment.start, self._transitions,
            {fragment.accept: tag}
        )


def nfa_from_postfix(postfix: str, tag: Tag) -> Nfa:
    builder = NfaBuilder()
    stack: List[Fragment] = []
    for atom in postfix_atoms(postfix):
        if not is_operator(atom):
            stack.append(builder.symbol(ord(atom_symbol(atom))))
        elif atom == "*":
            if stack:
                stack.append(builder.star(stack.pop()))
        elif len(stack) >= 2:
            right = stack.pop()
            left = stack.pop()
            if atom == "|":
                stack.append(builder.alternation(left, right))
            else:
                stack.append(builder.concat(left, right))
    fragment = stack[-1] if stack else builder.empty()
    return builder.build(fragment, tag)


def nfa_from_regex(regex: str, tag: Tag) -> Nfa:
    return nfa_from_postfix(to_postfix(regex), tag)


def combine_nfas(nfas: Sequence[Nfa]) -> Nfa:
    if not nfas:
        raise BuildError("No token patterns defined")

    transitions: List[NfaTransition] = []
    accepts: Dict[int, Tag] = {}
    start = 0
    offset = 1
    for priority, nfa in enumerate(nfas):
        transitions.append(NfaTransition(start, EPSILON, nfa.start + offset))
        for source, symbol, target in nfa.transitions:
            transitions.append(
                NfaTransition(source + offset, symbol, target + offset)
            )
        for state, tag in nfa.accepts.items():
            accepts[state + offset] = Tag(tag.name, priority)
        offset += len(nfa.states)

    return Nfa(offset, start, transitions, accepts)
