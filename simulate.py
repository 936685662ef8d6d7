from __future__ import annotations
import typing

import fa


def epsilon_closure(states: typing.Iterable[fa.State]) -> set[fa.State]:
    '''
        Returns states together with everything reachable from them by
        epsilon edges only.
    '''
    closure: dict[int, fa.State] = {state.id: state for state in states}
    stack = list(closure.values())
    while stack:
        state = stack.pop()
        for next_state in state.next_by_eps:
            if next_state.id not in closure:
                closure[next_state.id] = next_state
                stack.append(next_state)
    return set(closure.values())


def step(a: fa.Automaton, symbol: fa.Symbol) -> set[fa.State]:
    next_states: dict[int, fa.State] = {}
    for state in epsilon_closure(a.current):
        next_state = state.next_by_symbol.get(symbol)
        if next_state is not None:
            next_states[next_state.id] = next_state
    # may become empty, which only means nothing matches any more
    a.current = set(next_states.values())
    return a.current


def is_accepting(a: fa.Automaton) -> bool:
    return any(state.is_final for state in epsilon_closure(a.current))


def run(a: fa.Automaton, symbols: typing.Iterable[fa.Symbol]) -> bool:
    a.reset()
    for symbol in symbols:
        step(a, symbol)
    return is_accepting(a)


def iter_accepting(
        a: fa.Automaton,
        symbols: typing.Iterable[fa.Symbol]
) -> typing.Generator[bool, None, None]:
    '''
        Yields whether each prefix of symbols is accepted, the empty
        prefix first.
    '''
    a.reset()
    yield is_accepting(a)
    for symbol in symbols:
        step(a, symbol)
        yield is_accepting(a)


def accepts(a: fa.Automaton, symbols: typing.Iterable[fa.Symbol]) -> bool:
    '''
        Same as run, but a.current is left as it is.
    '''
    cursor = fa.Automaton(a.start, a.stop, a.ids)
    return run(cursor, symbols)
