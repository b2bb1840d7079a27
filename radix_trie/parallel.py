""" Module for searching a radix tree with a fan-out of read-only tasks. """

import os
import sys
from typing import Any, Callable, Dict, Iterable, List

from .node import RadixNode
from .prefix import RawKey
from .tree import RadixTree

_MISSING = object()


class ParallelSearch:
    """ Runs independent lookups on one tree in a pool of threads and joins the results before returning.

        Ordinary lookups on a radix tree are strictly sequential: only one child can continue a key, so there is
        never anything to search in parallel within a single key. What can be split up is a batch of unrelated keys,
        or the collection of values from the sibling subtrees under a prefix, since neither task shares any state
        with another. The tree must not be mutated while a search is running.

        If the pool fails for any reason, the same work is retried serially with a message to stderr. """

    def __init__(self, tree:RadixTree, *, workers=0, retry=True) -> None:
        if not workers:
            workers = os.cpu_count() or 1
        self._tree = tree        # Tree to search. Never modified here.
        self._workers = workers  # Number of threads in each pool (0 = one for each logical CPU core).
        self._retry = retry      # If True, retry serially on failure.

    def _map(self, func:Callable, items:Iterable) -> list:
        """ Perform the equivalent of builtins.map, keeping the results in order. """
        items = list(items)
        # Don't add the overhead of a pool if there's nothing to fan out.
        if self._workers == 1 or len(items) < 2:
            return [*map(func, items)]
        try:
            return self._parallel_map(func, items)
        except Exception:
            if not self._retry:
                raise
            print("Parallel search failed. Trying again serially...", file=sys.stderr)
            return [*map(func, items)]

    def _parallel_map(self, func:Callable, items:list) -> list:
        # multiprocessing is fairly large, so don't import until we have to.
        from multiprocessing.pool import ThreadPool
        with ThreadPool(processes=min(self._workers, len(items))) as pool:
            return pool.map(func, items)

    def _lookup(self, key:RawKey) -> Any:
        return self._tree.get(key, _MISSING)

    def find_all(self, keys:Iterable[RawKey]) -> Dict[RawKey, Any]:
        """ Look up every key in its own task. Return a dict with the values of those that were found. """
        keys = list(keys)
        values = self._map(self._lookup, keys)
        return {k: v for k, v in zip(keys, values) if v is not _MISSING}

    @staticmethod
    def _collect(node:RadixNode) -> List[Any]:
        return [*node.iter_values()]

    def values_with_prefix(self, prefix:RawKey) -> List[Any]:
        """ Find the prefix node sequentially, then collect each child subtree in its own task.
            The values come out in the same post-order as RadixTree.get_all_with_prefix. """
        node = self._tree.subtree_with_prefix(prefix)
        if node is None:
            return []
        values = []
        for subtree_values in self._map(self._collect, node.children.values()):
            values += subtree_values
        if node.has_value:
            values.append(node.value)
        return values
