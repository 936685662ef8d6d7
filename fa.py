from __future__ import annotations
import collections
import itertools
import typing
from collections import defaultdict as dd


EPSILON = ''

Symbol = typing.Hashable


class FAError(Exception):
    pass


class DuplicateTransition(FAError):
    pass


class NotFound(FAError):
    pass


class IdAllocator:
    '''
        Hands out state ids for one build session.

        Every state of a graph that is traversed as a whole must come from
        the same allocator, because traversals tell states apart by id.
    '''

    def __init__(self, first: int = 0) -> None:
        self._counter = itertools.count(first)

    def __call__(self) -> int:
        return next(self._counter)


class State:

    def __init__(self: State, id: int, is_final: bool = False) -> None:
        self.id: int = id
        self.is_final: bool = is_final
        self.next_by_symbol: dict[Symbol, State] = {}
        self.next_by_eps: list[State] = []

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(id={self.id!r}, is_final={self.is_final!r})'

    def __rshift__(self: State, label: Symbol) -> tuple[State, Symbol]:
        '''
            Creates an edge between states by given label.
        '''
        return (self, label)

    def __rrshift__(self: State, left_label: tuple[State, Symbol]) -> None:
        '''
            Creates an edge between states by given label.
        '''
        left, label = left_label
        set_transition(left, label, self)

    def next_states(self: State) -> list[State]:
        return [*self.next_by_symbol.values(), *self.next_by_eps]

    def bfs(self: State) -> typing.Generator[State, None, None]:
        '''
            Yields every state reachable from this one exactly once.
            Next states of a state are read only after it is yielded.
        '''

        queue: collections.deque[State] = collections.deque()
        queue.append(self)

        visited: set[int] = set()

        while queue:
            state = queue.popleft()

            if state.id not in visited:
                visited.add(state.id)

                yield state

                queue.extend(state.next_states())


def set_transition(state: State, symbol: Symbol, target: State) -> None:
    if symbol == EPSILON:
        state.next_by_eps.append(target)
        return
    if symbol in state.next_by_symbol:
        raise DuplicateTransition(
            f'state {state.id} already has a transition on {symbol!r}')
    state.next_by_symbol[symbol] = target


def find_first(state: State,
               predicate: typing.Callable[[State], bool]) -> State:
    '''
        Depth-first search in preorder: a state comes before its symbol
        targets, which come before its epsilon targets.
    '''
    stack: list[State] = [state]
    visited: set[int] = set()
    while stack:
        current = stack.pop()
        if current.id in visited:
            continue
        visited.add(current.id)
        if predicate(current):
            return current
        stack.extend(reversed(current.next_states()))
    raise NotFound(f'no state reachable from {state.id} matches {predicate!r}')


def find_by_id(state: State, id: int) -> State:
    try:
        return find_first(state, lambda s: s.id == id)
    except NotFound:
        raise NotFound(f'state {id} is not reachable from {state.id}') from None


def deep_copy(state: State,
              id_map: dict[int, State] | None = None,
              ids: IdAllocator | None = None) -> State:
    '''
        Copies the graph rooted at state and returns the copy of state.

        id_map maps old ids to new states. Callers may share it between
        calls: a state that is already there is not copied again, so shared
        structure and cycles survive the copy. New states get fresh ids
        from ids, by default ids above every id of the graph and of id_map.

        Copy manually via loop to avoid recursion error.
    '''
    if id_map is None:
        id_map = {}
    if ids is None:
        used = [s.id for s in state.bfs()]
        used += [*id_map, *(s.id for s in id_map.values())]
        ids = IdAllocator(max(used) + 1)

    pending: collections.deque[State] = collections.deque()

    def clone(old: State) -> State:
        new = id_map.get(old.id)
        if new is None:
            new = id_map[old.id] = State(ids(), old.is_final)
            pending.append(old)
        return new

    root = clone(state)

    while pending:
        old = pending.popleft()
        new = id_map[old.id]
        for symbol, old_next in old.next_by_symbol.items():
            new >> symbol >> clone(old_next)
        for old_next in old.next_by_eps:
            new >> EPSILON >> clone(old_next)

    return root


def iter_edges(
        start: State
) -> typing.Generator[tuple[State, Symbol, State], None, None]:
    for state in start.bfs():
        for symbol, next_state in state.next_by_symbol.items():
            yield (state, symbol, next_state)
        for next_state in state.next_by_eps:
            yield (state, EPSILON, next_state)


class Automaton:

    def __deepcopy__(self: Automaton, memo: dict[int, typing.Any]) -> Automaton:
        new = self.copy()
        memo[id(self)] = new
        return new

    def __init__(self, start: State, stop: State, ids: IdAllocator) -> None:
        '''
            stop is the accepting state, tracked here instead of being
            searched for in the graph.
        '''
        self.start: State = start
        self.stop: State = stop
        self.ids: IdAllocator = ids
        # states before epsilon closure
        self.current: set[State] = {start}

    def __repr__(self) -> str:
        return (f'{self.__class__.__name__}(start={self.start!r}, stop={self.stop!r}, '
                f'current={sorted(s.id for s in self.current)!r})')

    def reset(self) -> None:
        self.current = {self.start}

    def copy(self) -> Automaton:
        '''
            returns new Automaton with its own graph and cursor, self is not invalidated.
        '''
        id_map: dict[int, State] = {}
        start = deep_copy(self.start, id_map, self.ids)
        new = Automaton(start, _resolve(start, id_map, self.stop), self.ids)
        new.current = {_resolve(start, id_map, s) for s in self.current}
        return new


def _resolve(root: State, id_map: dict[int, State], old: State) -> State:
    if old.id not in id_map:
        raise NotFound(f'state {old.id} was not copied')
    return find_by_id(root, id_map[old.id].id)


def from_symbol(symbol: Symbol, ids: IdAllocator | None = None) -> Automaton:
    '''
        new Automaton of two states, connected by symbol.
    '''
    if symbol == EPSILON:
        raise ValueError('from_symbol needs a symbol, not epsilon.')
    if ids is None:
        ids = IdAllocator()
    start = State(ids())
    stop = State(ids(), is_final=True)
    start >> symbol >> stop
    return Automaton(start, stop, ids)


def concat(a: Automaton, b: Automaton) -> Automaton:
    '''
        returns new Automaton for a followed by b, a and b are not invalidated.
    '''
    ids = a.ids

    a_map: dict[int, State] = {}
    b_map: dict[int, State] = {}
    a_start = deep_copy(a.start, a_map, ids)
    b_start = deep_copy(b.start, b_map, ids)

    a_stop = _resolve(a_start, a_map, a.stop)
    b_stop = _resolve(b_start, b_map, b.stop)

    a_stop.is_final = False
    a_stop >> EPSILON >> b_start

    return Automaton(a_start, b_stop, ids)


def fa_to_json(a: Automaton) -> dict[str, typing.Any]:
    number: dd[int, int] = dd(lambda: len(number) + 1)

    start_id = str(number[a.start.id])

    states: set[str] = {start_id}
    final_states: list[str] = []
    transitions: list[list[str]] = []
    letter_set: set[str] = set()

    # assign numbers and collect states / finals
    for state in a.start.bfs():
        state_id = str(number[state.id])
        states.add(state_id)

        if state.is_final:
            final_states.append(state_id)

    # collect transitions
    for state, symbol, next_state in iter_edges(a.start):
        label = str(symbol)
        transitions.append([str(number[state.id]), label, str(number[next_state.id])])
        if label != EPSILON:
            letter_set.add(label)

    return {
        "states": sorted(states, key=int),
        "letters": sorted(letter_set),
        "transition_function": transitions,
        "start_states": [start_id],
        "final_states": final_states,
    }
