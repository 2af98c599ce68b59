from collections import deque
from typing import (
    Deque, Dict, FrozenSet, Iterator, List, Optional, Tuple
)

from .errors import BuildError
from .nfa import Nfa, Tag

DEFAULT_MAX_STATES = 10000

Subset = Tuple[int, ...]


class Dfa:
    def __init__(self, transitions: List[Dict[int, int]],
                 accepts: Dict[int, Tag], alphabet: List[int],
                 subsets: Optional[List[Subset]] = None, start: int = 0):
        self._transitions = [dict(row) for row in transitions]
        self._accepts = dict(accepts)
        self._alphabet = tuple(sorted(alphabet))
        self._subsets = subsets
        self._start = start

    @property
    def start(self) -> int:
        return self._start

    @property
    def num_states(self) -> int:
        return len(self._transitions)

    @property
    def alphabet(self) -> Tuple[int, ...]:
        return self._alphabet

    @property
    def accepts(self) -> Dict[int, Tag]:
        return dict(self._accepts)

    def iter_states(self) -> Iterator[Tuple[int, Dict[int, int]]]:
        for state, row in enumerate(self._transitions):
            yield state, dict(row)

    def next_state(self, state: int, symbol: int) -> Optional[int]:
        return self._transitions[state].get(symbol)

    def get_tag(self, state: int) -> Optional[Tag]:
        return self._accepts.get(state)

    def get_tags(self) -> List[str]:
        names: List[str] = []
        tags = sorted(set(self._accepts.values()), key=lambda tag: tag[1])
        for tag in tags:
            if tag.name not in names:
                names.append(tag.name)
        return names

    def get_subset(self, state: int) -> Optional[Subset]:
        if self._subsets is None:
            return None
        return self._subsets[state]

    def matches(self, text: str) -> bool:
        state = self._start
        for char in text:
            target = self.next_state(state, ord(char))
            if target is None:
                return False
            state = target
        return state in self._accepts


def resolve_tag(nfa: Nfa, subset: FrozenSet[int]) -> Optional[Tag]:
    tags = [tag for tag in map(nfa.get_tag, subset) if tag is not None]
    if not tags:
        return None
    return min(tags, key=lambda tag: tag.priority)


def make_dfa(nfa: Nfa,
             max_states: Optional[int] = DEFAULT_MAX_STATES) -> Dfa:
    alphabet = nfa.alphabet()
    start = nfa.epsilon_closure([nfa.start])
    subset_to_index: Dict[Subset, int] = {tuple(sorted(start)): 0}
    subsets: List[FrozenSet[int]] = [start]
    transitions: List[Dict[int, int]] = [{}]
    queue: Deque[Tuple[int, FrozenSet[int]]] = deque([(0, start)])

    while queue:
        source, source_subset = queue.popleft()

        for symbol in alphabet:
            target_subset = nfa.epsilon_closure(
                nfa.move(source_subset, symbol)
            )
            if not target_subset:
                continue

            new_index = len(subsets)
            target = subset_to_index.setdefault(
                tuple(sorted(target_subset)), new_index
            )
            if target == new_index:
                if max_states is not None and new_index >= max_states:
                    raise BuildError(
                        "DFA exceeds {} states".format(max_states)
                    )
                subsets.append(target_subset)
                transitions.append({})
                queue.append((target, target_subset))

            transitions[source][symbol] = target

    accepts: Dict[int, Tag] = {}
    for index, subset in enumerate(subsets):
        tag = resolve_tag(nfa, subset)
        if tag is not None:
            accepts[index] = tag

    return Dfa(
        transitions, accepts, alphabet,
        [tuple(sorted(subset)) for subset in subsets]
    )
