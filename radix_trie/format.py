""" Module for rendering radix trees as indented text for debugging. """

import sys
from typing import Iterator, TextIO

from .node import RadixNode
from .tree import RadixTree


class TreeFormatter:
    """ Draws one line per node, indented by depth, with the label quoted and the value (if any) after it.
        Children are drawn in order of their leading symbols so the same tree always looks the same. """

    def __init__(self, indent="\t", joint_mark="-") -> None:
        self._indent = indent          # Indentation added for each level below the root.
        self._joint_mark = joint_mark  # Shown instead of a value on nodes that have none.

    def _format_node(self, node:RadixNode) -> str:
        label = node.label
        if isinstance(label, bytes):
            label = label.decode('utf-8', 'backslashreplace')
        info = f'value: {node.value!r}' if node.has_value else self._joint_mark
        return f"'{label}'  {info}"

    def _lines(self, root:RadixNode) -> Iterator[str]:
        """ Yield lines depth-first, each node before its children. """
        stack = [(child, 0) for child in reversed(root.sorted_children())]
        while stack:
            node, level = stack.pop()
            yield self._indent * level + self._format_node(node)
            stack += [(child, level + 1) for child in reversed(node.sorted_children())]

    def format(self, tree:RadixTree) -> str:
        """ Return the drawing of every node below the root, one per line. """
        return "\n".join(self._lines(tree.root))


def format_tree(tree:RadixTree, **kwargs) -> str:
    return TreeFormatter(**kwargs).format(tree)


def print_tree(tree:RadixTree, file:TextIO=None, **kwargs) -> None:
    """ Write the drawing of <tree> to <file> (standard output by default). Empty trees draw nothing. """
    text = format_tree(tree, **kwargs)
    if text:
        print(text, file=file or sys.stdout)
