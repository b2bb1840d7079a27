""" Benchmark setups for each tree operation. Each returns a no-arg callable that does the timed work.
    Key sets are random but seeded, so every run of a benchmark does exactly the same thing. """

from random import Random

_ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def _random_keys(n:int, *, max_len=12, alphabet=_ALPHABET) -> list:
    """ Random keys from a small alphabet share lots of prefixes, which is what exercises splits and merges. """
    rnd = Random(n)
    return ["".join(rnd.choice(alphabet) for _ in range(rnd.randint(1, max_len))) for _ in range(n)]


def _filled_tree(keys:list):
    from radix_trie import RadixTree
    t = RadixTree()
    for i, k in enumerate(keys):
        t.insert(k, i)
    return t


def insert(n=100000):
    keys = _random_keys(n)
    def run() -> None:
        _filled_tree(keys)
    return run


def find(n=100000):
    keys = _random_keys(n)
    t = _filled_tree(keys)
    misses = [k + "#" for k in keys]
    def run() -> None:
        for k in keys:
            t.get(k)
        for k in misses:
            t.get(k)
    return run


def remove(n=100000):
    keys = _random_keys(n)
    def run() -> None:
        t = _filled_tree(keys)
        for k in keys:
            t.delete(k)
    return run


def prefix(n=20000):
    keys = _random_keys(n)
    t = _filled_tree(keys)
    rnd = Random(n)
    prefixes = [k[:rnd.randint(1, 3)] for k in keys]
    def run() -> None:
        for p in prefixes:
            t.get_all_with_prefix(p)
    return run


def parallel_find(n=100000, workers=4):
    from radix_trie.parallel import ParallelSearch
    keys = _random_keys(n)
    search = ParallelSearch(_filled_tree(keys), workers=workers)
    def run() -> None:
        search.find_all(keys)
    return run


def unicode_insert(n=50000):
    keys = _random_keys(n, alphabet="ðñüéß日本語")
    def run() -> None:
        _filled_tree(keys)
    return run
