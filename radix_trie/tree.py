""" Module for the radix tree container. """

from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .node import RadixNode
from .prefix import longest_common_prefix, RawKey, SymbolSet, TEXT_SYMBOLS

NodePath = List[Tuple[RadixNode, RadixNode]]  # (parent, child) pairs from the root down to a node.
ItemSource = Union[Mapping, Iterable[Tuple[RawKey, Any]]]

_MISSING = object()


class TreeStructureError(AssertionError):
    """ Raised by validation if the tree breaks one of its structural invariants. """


class RadixTree:
    """
    A path-compressed prefix tree (PATRICIA trie) mapping string keys to arbitrary values.

    Each node stores a segment of key (its label) instead of a single symbol, so a chain of nodes with one child each
    never exists: it is always compressed into one node. A key is found by starting at the root and repeatedly
    moving to the child whose label starts with the next symbol of the key, consuming the label as we go.
    Since no two siblings share a leading symbol, at most one child can ever match, and no backtracking is needed.

    Insertion may split a node when a new key diverges partway through its label. Removal may merge a node with
    its sole child, or detach it altogether, so that the tree after any sequence of operations has the same shape
    it would have had if only the remaining keys had been inserted.

    Keys are text by default, matched one code point at a time. A tree built with ByteSymbols matches raw bytes.
    Lookups never raise on keys that could not be stored; they simply find nothing. Insertion raises
    ValidationError on an empty or badly encoded key and leaves the tree unchanged.

    The tree is not thread-safe. Concurrent readers are fine as long as nothing mutates it in the meantime.
    """

    def __init__(self, items:ItemSource=(), *, symbols:SymbolSet=TEXT_SYMBOLS) -> None:
        self._symbols = symbols                # Converts and validates keys into symbol sequences.
        self._root = RadixNode(symbols.empty)  # Never has a value and its label is always empty.
        self.update(items)

    @property
    def root(self) -> RadixNode:
        return self._root

    @property
    def symbols(self) -> SymbolSet:
        return self._symbols

    def insert(self, key:RawKey, value:Any) -> RadixNode:
        """ Store <value> under <key>, splitting a node if the key diverges partway through its label.
            Return the node where the value now lives. """
        key = self._symbols.validate(key)
        node = self._root
        while True:
            child = node.get_child(key[0])
            if child is None:
                # Nothing here starts with this symbol. The rest of the key becomes a brand-new leaf.
                leaf = RadixNode(key, value)
                node.add_child(leaf)
                return leaf
            label = child.label
            if key == label:
                child.set_value(value)
                return child
            _, n = longest_common_prefix(key, label)
            if n == len(label):
                # The key continues past this node [e.g. key is "abcd", label is "ab"]. Go into it with "cd".
                node = child
                key = key[n:]
                continue
            # The key diverges inside the label. Put the common part in a new node above the old child.
            joint = child.split(n)
            node.add_child(joint)
            if n == len(key):
                # The key is a strict prefix of the label [e.g. key is "ab", label is "abc"].
                joint.set_value(value)
                return joint
            # The key and label both go on separately [e.g. key is "abx", label is "abc"].
            leaf = RadixNode(key[n:], value)
            joint.add_child(leaf)
            return leaf

    set = insert
    __setitem__ = insert

    def _find_path(self, key:RawKey) -> NodePath:
        """ Descend along <key> and return the path to the node it exactly reaches, or an empty list.
            The search short-circuits on the first mismatch; no other sibling could ever match. """
        key = self._symbols.try_convert(key)
        if not key:
            return []
        path = []
        node = self._root
        while key:
            child = node.get_child(key[0])
            if child is None or not key.startswith(child.label):
                return []
            path.append((node, child))
            key = key[len(child.label):]
            node = child
        return path

    def find(self, key:RawKey) -> Optional[RadixNode]:
        """ Return the node exactly reached by <key>, with or without a value, or None if there isn't one.
            Keys that run out in the middle of a label do not reach any node. """
        path = self._find_path(key)
        if not path:
            return None
        return path[-1][1]

    subtree = find

    def get(self, key:RawKey, default:Any=None) -> Any:
        """ Return the value stored under <key>, or <default> if there isn't one. """
        node = self.find(key)
        if node is None or not node.has_value:
            return default
        return node.value

    def __getitem__(self, key:RawKey) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key:RawKey) -> bool:
        node = self.find(key)
        return node is not None and node.has_value

    def _find_prefix(self, prefix:RawKey) -> Tuple[Sequence, Optional[RadixNode]]:
        """ Return the first node whose subtree holds every key starting with <prefix>, along with the full key
            that reaches it. That key may be longer than the prefix, since the prefix may end inside a label. """
        prefix = self._symbols.try_convert(prefix)
        if prefix is None:
            return None, None
        node = self._root
        consumed = node.label
        while prefix:
            child = node.get_child(prefix[0])
            if child is None:
                return None, None
            label = child.label
            if label.startswith(prefix):
                return consumed + label, child
            if not prefix.startswith(label):
                return None, None
            prefix = prefix[len(label):]
            consumed += label
            node = child
        return consumed, node

    def subtree_with_prefix(self, prefix:RawKey) -> Optional[RadixNode]:
        """ Return the highest node under which all keys starting with <prefix> are found, or None.
            Unlike find(), the node for the exact prefix doesn't need to exist. The empty prefix gives the root. """
        return self._find_prefix(prefix)[1]

    def get_all_with_prefix(self, prefix:RawKey) -> List[Any]:
        """ Return a list of every value stored under a key that starts with <prefix>.
            Every key starts with the empty prefix, so "" returns every value in the tree.
            Values come out deepest-first within each branch; the order among siblings is not defined. """
        node = self.subtree_with_prefix(prefix)
        if node is None:
            return []
        return [*node.iter_values()]

    def items_with_prefix(self, prefix:RawKey) -> Iterator[Tuple[Sequence, Any]]:
        """ Yield a (key, value) pair for every stored key that starts with <prefix>. """
        start_key, node = self._find_prefix(prefix)
        if node is not None:
            for key, n in self._walk_from(start_key, node):
                yield key, n.value

    def keys_with_prefix(self, prefix:RawKey) -> List[Sequence]:
        return [k for k, _ in self.items_with_prefix(prefix)]

    def remove(self, key:RawKey) -> Optional[RadixNode]:
        """ Remove the value stored under <key> and return a detached node with the label and value it had.
            Return None if no value was stored there. Nodes left without purpose are merged or detached. """
        path = self._find_path(key)
        if not path:
            return None
        parent, node = path[-1]
        if not node.has_value:
            return None
        removed = RadixNode(node.label, node.value)
        n_children = len(node.children)
        node.clear_value()
        if n_children == 1:
            node.absorb_child()
        elif not n_children:
            parent.remove_child(node)
            self._collapse(path[:-1])
        return removed

    def _collapse(self, path:NodePath) -> None:
        """ After a child is detached, walk back up <path> and clean up valueless nodes it left behind.
            A joint with only one child left is merged into it. One with none left is detached in turn. """
        for parent, node in reversed(path):
            if node.has_value:
                return
            n_children = len(node.children)
            if n_children > 1:
                return
            if n_children == 1:
                node.absorb_child()
                return
            parent.remove_child(node)

    def delete(self, key:RawKey) -> None:
        """ Remove the value under <key> if there is one. Nothing happens if there isn't. """
        self.remove(key)

    def pop(self, key:RawKey, *default:Any) -> Any:
        """ Remove the value under <key> and return it, or <default> if not found. """
        node = self.remove(key)
        if node is not None:
            return node.value
        if default:
            return default[0]
        raise KeyError(key)

    def __delitem__(self, key:RawKey) -> None:
        self.pop(key)

    def __len__(self) -> int:
        """ Count the nodes with values by a full traversal. """
        return self._root.count()

    def _walk_from(self, key:Sequence, node:RadixNode) -> Iterator[Tuple[Sequence, RadixNode]]:
        """ Yield (full key, node) for every node with a value in the subtree of <node> reached by <key>. """
        stack = [(key, node)]
        while stack:
            key, node = stack.pop()
            if node.has_value:
                yield key, node
            for child in node.children.values():
                stack.append((key + child.label, child))

    def walk(self) -> Iterator[Tuple[Sequence, RadixNode]]:
        """ Yield (key, node) for every node in the tree with a value. """
        return self._walk_from(self._root.label, self._root)

    def __iter__(self) -> Iterator[Sequence]:
        for key, _ in self.walk():
            yield key

    def keys(self) -> List[Sequence]:
        return [*self]

    def values(self) -> List[Any]:
        return [*self._root.iter_values()]

    def items(self) -> List[Tuple[Sequence, Any]]:
        return [(key, node.value) for key, node in self.walk()]

    def do(self, visitor:Callable[[Any], Any]) -> None:
        """ Call <visitor> on every value stored in the tree. Return values are ignored. """
        for value in self._root.iter_values():
            visitor(value)

    def update(self, *args:ItemSource, **kwargs:Any) -> None:
        """ Insert items from any number of mappings and/or iterables of pairs, then keywords. """
        for src in (*args, kwargs):
            iterable = src.items() if isinstance(src, Mapping) else src
            for k, v in iterable:
                self.insert(k, v)

    def clear(self) -> None:
        self._root = RadixNode(self._symbols.empty)

    def validate(self) -> None:
        """ Check every structural invariant of the tree and raise TreeStructureError on the first failure. """
        root = self._root
        if root.label:
            raise TreeStructureError(f'Root has a non-empty label {root.label!r}.')
        if root.has_value:
            raise TreeStructureError('Root holds a value.')
        stack = [(root.label, root)]
        while stack:
            key, node = stack.pop()
            for symbol, child in node.children.items():
                path = key + child.label
                if not child.label:
                    raise TreeStructureError(f'Node under {key!r} has an empty label.')
                if child.label[0] != symbol:
                    raise TreeStructureError(f'Node {path!r} is filed under the wrong symbol {symbol!r}.')
                if not child.has_value:
                    if not child.children:
                        raise TreeStructureError(f'Node {path!r} has no value and no children.')
                    if len(child.children) == 1:
                        raise TreeStructureError(f'Node {path!r} has no value and only one child.')
                stack.append((path, child))

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} with {len(self)} items>'


def new(*, symbols:SymbolSet=TEXT_SYMBOLS) -> RadixTree:
    """ Return an empty tree. """
    return RadixTree(symbols=symbols)
