from __future__ import annotations
import sys
import json
import typing
import functools
import contextlib

import fa
import simulate
from utils import ThrowingArgumentParser, debug, graphviz


def word_to_fa(word: str) -> fa.Automaton:
    '''
        Automaton accepting exactly word, one symbol per character.
    '''
    ids = fa.IdAllocator()
    return functools.reduce(fa.concat, [fa.from_symbol(c, ids) for c in word])


def process_args(
    argv: list[str],
    stdin: typing.IO[str],
    stdout: typing.IO[str],
    stderr: typing.IO[str],
) -> int:

    parser = ThrowingArgumentParser(prog=argv[0], exit_on_error=False)
    parser.add_argument('--word', required=True)
    parser.add_argument('--prefixes', action='store_true')
    parser.add_argument('--dump', action='store_true')

    try:
        args = parser.parse_args(argv[1:])
    except Exception as e:
        print(e, file=stderr)
        return 1

    word = typing.cast(str, args.word)
    if not word:
        print('word must not be empty.', file=stderr)
        return 1

    automaton = word_to_fa(word)
    print(graphviz(automaton), file=debug)

    if args.dump:
        print(json.dumps(fa.fa_to_json(automaton), indent=4), file=stdout)

    for line in stdin.read().splitlines():
        if args.prefixes:
            verdicts = simulate.iter_accepting(automaton, line)
            print(' '.join('YES' if v else 'NO' for v in verdicts), file=stdout)
        else:
            print('YES' if simulate.run(automaton, line) else 'NO', file=stdout)

    return 0


def main(
    argv: list[str],
    stdin: typing.IO[str],
    stdout: typing.IO[str],
    stderr: typing.IO[str],
) -> int:
    with (
            contextlib.redirect_stdout(stdout),
            contextlib.redirect_stderr(stderr),
    ):
        return process_args(argv, stdin, stdout, stderr)


if __name__ == '__main__':
    exit(main(sys.argv, sys.stdin, sys.stdout, sys.stderr))
