#!/usr/bin/env python3

""" Primary entry point for radix tree benchmarks.
    Usage: python -m benchmarks [operation ...] [--profiler=raw|detailed] [--runs=3] [--size=0]
    With no operations named, every one is run. Each operation gets a fresh profiler and keeps its best run. """

import sys

from benchmarks import tests
from benchmarks.profilers import AbstractProfiler, DetailedProfiler, RawProfiler
from radix_trie.util.cmdline import CmdlineOptions

OPERATIONS = {
    "insert": tests.insert,
    "find": tests.find,
    "remove": tests.remove,
    "prefix": tests.prefix,
    "parallel_find": tests.parallel_find,
    "unicode_insert": tests.unicode_insert,
}
PROFILERS = {"raw": RawProfiler, "detailed": DetailedProfiler}


class BenchmarkOptions(CmdlineOptions):

    def __init__(self) -> None:
        super().__init__("Time radix tree operations on seeded random keys.")
        self.add("profiler", "raw", "Profiler to use: 'raw' (wall time) or 'detailed' (cProfile listing).")
        self.add("runs", 3, "Number of timed runs per operation. Only the best one is shown.")
        self.add("size", 0, "Number of keys to generate (0 = each operation's own default).")


def run_operation(name:str, profiler:AbstractProfiler, runs:int, size:int) -> str:
    """ Set up one operation outside the timer, then time <runs> calls of it. """
    setup = OPERATIONS[name]
    func = setup(size) if size else setup()
    for _ in range(runs):
        profiler.run(func)
    return profiler.format_best()


def main(argv=None) -> int:
    opts = BenchmarkOptions()
    opts.parse(argv)
    names = opts.extras() or [*OPERATIONS]
    unknown = [n for n in names if n not in OPERATIONS]
    if unknown:
        print(f'Unknown operations: {", ".join(unknown)}. Choose from: {", ".join(OPERATIONS)}.')
        return -1
    profiler_cls = PROFILERS.get(opts.profiler)
    if profiler_cls is None:
        print(f'Unknown profiler "{opts.profiler}". Choose from: {", ".join(PROFILERS)}.')
        return -1
    for name in names:
        print(f'{name} ({opts.profiler}, best of {opts.runs}):')
        print(run_operation(name, profiler_cls(), opts.runs, opts.size))
    return 0


if __name__ == '__main__':
    sys.exit(main())
