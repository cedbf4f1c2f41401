import sys
from typing import Any, Callable, Generic, IO, Iterator, List, Optional, TypeVar

T = TypeVar('T')

Comparator = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class OrderedTree(Generic[T]):
    """Binary search tree that rebuilds itself into minimal height whenever
    an insertion leaves it unbalanced.

    Balance is checked after every successful insert by recomputing subtree
    heights at each node, so a check costs O(n*h).
    """

    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['OrderedTree.Node'] = None
            self.right: Optional['OrderedTree.Node'] = None

    def __init__(self, comparator: Optional[Comparator] = None) -> None:
        self._root: Optional[OrderedTree.Node] = None
        self._size: int = 0
        self._compare: Comparator = comparator if comparator is not None else natural_order

    def insert(self, value: T) -> bool:
        if self._root is None:
            self._root = OrderedTree.Node(value)
            self._size += 1
            return True

        node = self._root
        while True:
            order = self._compare(value, node.value)
            if order < 0:
                if node.left is None:
                    node.left = OrderedTree.Node(value)
                    break
                node = node.left
            elif order > 0:
                if node.right is None:
                    node.right = OrderedTree.Node(value)
                    break
                node = node.right
            else:
                return False

        self._size += 1
        if not self.is_balanced():
            self.rebuild()
        return True

    def contains(self, value: T) -> bool:
        node = self._root
        while node is not None:
            order = self._compare(value, node.value)
            if order < 0:
                node = node.left
            elif order > 0:
                node = node.right
            else:
                return True
        return False

    def height(self) -> int:
        """Height with the convention empty = -1, single node = 0."""
        return self._height(self._root)

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def rebuild(self) -> None:
        """Rebuild into a tree of height floor(log2(n)) holding the same elements.

        The new node graph is built completely before it replaces the root,
        so an exception while building leaves the tree as it was.
        """
        values = self.in_order()
        self._root = self._build(values, 0, len(values))

    def in_order(self) -> List[T]:
        result: List[T] = []
        stack: List[OrderedTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def dump(self) -> Iterator[T]:
        """Ascending elements as a one-shot iterator over a snapshot."""
        return iter(self.in_order())

    def print_in_order(self, file: Optional[IO[str]] = None) -> None:
        out = file if file is not None else sys.stdout
        for value in self.dump():
            print(value, file=out)

    def copy(self) -> 'OrderedTree[T]':
        clone: OrderedTree[T] = OrderedTree(self._compare)
        values = self.in_order()
        clone._root = clone._build(values, 0, len(values))
        clone._size = len(values)
        return clone

    def _height(self, node: Optional[Node]) -> int:
        if node is None:
            return -1
        return 1 + max(self._height(node.left), self._height(node.right))

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        if abs(self._height(node.left) - self._height(node.right)) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def _build(self, values: List[T], first: int, last: int) -> Optional[Node]:
        if last <= first:
            return None
        mid = first + (last - first) // 2
        node = OrderedTree.Node(values[mid])
        node.left = self._build(values, first, mid)
        node.right = self._build(values, mid + 1, last)
        return node

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __repr__(self) -> str:
        return f"OrderedTree({self.in_order()})"

    def __str__(self) -> str:
        return f"OrderedTree(size={self._size})"
