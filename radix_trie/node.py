""" Module for the recursive node type of a radix tree. """

from typing import Any, Dict, Iterator, List, Sequence


class RadixNode:
    """ One node of a radix tree. It owns its children outright and knows nothing about its parent.
        The value is tracked with an explicit flag, so None may be stored like anything else.
        A node without a value only exists to branch two or more keys sharing a prefix (a "joint"). """

    __slots__ = ("label", "children", "value", "has_value")

    def __init__(self, label:Sequence, *value:Any) -> None:
        self.label = label                         # Partial key segment on the edge into this node.
        self.children: Dict[Any, RadixNode] = {}   # Child nodes keyed by the first symbol of their label.
        self.value = value[0] if value else None   # Payload, only meaningful if has_value is True.
        self.has_value = bool(value)               # True if some key ends exactly at this node.

    def set_value(self, value:Any) -> None:
        self.value = value
        self.has_value = True

    def clear_value(self) -> None:
        self.value = None
        self.has_value = False

    def get_child(self, symbol:Any) -> "RadixNode":
        """ Return the only child that could continue a key starting with <symbol>, or None. """
        return self.children.get(symbol)

    def add_child(self, child:"RadixNode") -> None:
        """ Attach <child> under its leading symbol, replacing any node that was there. """
        self.children[child.label[0]] = child

    def remove_child(self, child:"RadixNode") -> None:
        del self.children[child.label[0]]

    def absorb_child(self) -> None:
        """ Merge this node with its sole child. The label grows by the child's label and everything else
            is taken from the child. The leading symbol stays the same, so the parent's mapping is still valid. """
        [child] = self.children.values()
        self.label += child.label
        self.value = child.value
        self.has_value = child.has_value
        self.children = child.children

    def split(self, n:int) -> "RadixNode":
        """ Cut this node's label after <n> symbols. Return a new valueless joint node holding the first part,
            with this node (now holding only the rest) as its sole child. The caller must graft it in. """
        joint = RadixNode(self.label[:n])
        self.label = self.label[n:]
        joint.add_child(self)
        return joint

    def iter_values(self) -> Iterator[Any]:
        """ Yield every value in this subtree post-order: all children's subtrees first, then this node.
            Trees can be far deeper than the recursion limit, so the walk keeps its own stack. """
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                if node.has_value:
                    yield node.value
                continue
            # Come back for this node after all of its children. The first child must come off the stack first.
            stack.append((node, True))
            stack += [(child, False) for child in reversed([*node.children.values()])]

    def count(self) -> int:
        """ Return the number of nodes with values in this subtree, including this one. """
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += node.has_value
            stack += node.children.values()
        return total

    def sorted_children(self) -> List["RadixNode"]:
        """ Return the children in order of leading symbol for display. The tree itself never relies on order. """
        return [self.children[k] for k in sorted(self.children)]

    def __repr__(self) -> str:
        value_str = f', {self.value!r}' if self.has_value else ''
        return f'{self.__class__.__name__}({self.label!r}{value_str})'
