""" Profilers for timing radix tree operations. """

from cProfile import Profile
from io import StringIO
import pstats
import time


class AbstractProfiler:
    """ Abstract tool to measure and format details about the execution of a Python callable. """

    def run(self, func) -> None:
        """ Call <func> with no arguments under a timer and record details about its performance. """
        raise NotImplementedError

    def format_best(self) -> str:
        """ Format a string with the details about the quickest recorded run. """
        raise NotImplementedError


class RawProfiler(AbstractProfiler):
    """ Records total wall time only. """

    def __init__(self) -> None:
        self._times = []  # Time in seconds for each call to run().

    def run(self, func) -> None:
        start_time = time.perf_counter()
        func()
        self._times.append(time.perf_counter() - start_time)

    def format_best(self) -> str:
        best = min(self._times)
        mean = sum(self._times) / len(self._times)
        return f'Best time = {best:.4f}s, mean = {mean:.4f}s over {len(self._times)} runs\n'


class DetailedProfiler(AbstractProfiler):
    """ Records time spent in every function called by the top-level callable using cProfile.
        Tree operations are made of many tiny calls, so the overhead here is large. Compare against RawProfiler. """

    def __init__(self, *, max_lines=25, sort_key='tottime') -> None:
        self._stats = []             # Profile objects for each call to run().
        self._max_lines = max_lines  # Maximum number of functions to print profiles on.
        self._sort_key = sort_key    # pstats sort order for the listing.

    def run(self, func) -> None:
        pr = Profile()
        pr.runcall(func)
        pr.create_stats()
        self._stats.append(pr)

    def format_best(self) -> str:
        """ Return the pstats listing for the run with the lowest total time. """
        best_pr = min(self._stats, key=lambda p: sum(s[2] for s in p.stats.values()))
        s_buf = StringIO()
        ps = pstats.Stats(best_pr, stream=s_buf).strip_dirs().sort_stats(self._sort_key)
        ps.print_stats(self._max_lines)
        lines = [line for line in s_buf.getvalue().splitlines() if line.strip()]
        return '\n'.join(lines) + '\n'
