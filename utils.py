from __future__ import annotations
import io
import typing
import argparse
from collections import defaultdict as dd

import fa


class ThrowingArgumentParser(argparse.ArgumentParser):

    def exit(self,
             status: int = 0,
             message: str | None = None) -> typing.NoReturn:
        raise argparse.ArgumentError(None, str(message))


debug: typing.IO[str]

try:
    debug = open('/dev/tty', 'w')
except Exception:
    debug = io.StringIO()


def graphviz(a: fa.Automaton) -> str:
    '''
        Renders the graph of a for the debug stream; current states are boxed.
    '''
    number: dd[int, int] = dd(lambda: len(number))
    current = {state.id for state in a.current}
    res = 'digraph G{\n'
    for state in a.start.bfs():
        shape = 'box' if state.id in current else 'ellipse'
        res += f'    {number[state.id]} [ label = "{state.id} {state.is_final}" shape = {shape} ]\n'
    for state, symbol, next_state in fa.iter_edges(a.start):
        res += f'    {number[state.id]} -> {number[next_state.id]} [ label = "{symbol}" ]\n'
    res += '}'
    return res
