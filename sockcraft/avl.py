"""A self-balancing AVL search tree; equal keys are kept, to the right."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True)
class _Node:
    key: Any
    left: _Node | None = None
    right: _Node | None = None
    height: int = 1


def _height(node: _Node | None) -> int:
    return node.height if node is not None else 0


def _update(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance_factor(node: _Node) -> int:
    return _height(node.left) - _height(node.right)


def _rotate_right(node: _Node) -> _Node:
    pivot = node.left
    assert pivot is not None
    node.left = pivot.right
    pivot.right = node
    _update(node)
    _update(pivot)
    return pivot


def _rotate_left(node: _Node) -> _Node:
    pivot = node.right
    assert pivot is not None
    node.right = pivot.left
    pivot.left = node
    _update(node)
    _update(pivot)
    return pivot


def _rebalance(node: _Node) -> _Node:
    _update(node)
    bf = _balance_factor(node)
    if bf > 1:
        if _balance_factor(node.left) < 0:
            node.left = _rotate_left(node.left)
        return _rotate_right(node)
    if bf < -1:
        if _balance_factor(node.right) > 0:
            node.right = _rotate_right(node.right)
        return _rotate_left(node)
    return node


class AVLTree:
    """An ordered multiset kept height-balanced."""

    def __init__(self) -> None:
        self._root: _Node | None = None
        self._size = 0

    def insert(self, key: Any) -> bool:
        self._root = self._insert(self._root, key)
        self._size += 1
        return True

    def _insert(self, node: _Node | None, key: Any) -> _Node:
        if node is None:
            return _Node(key)
        if key < node.key:
            node.left = self._insert(node.left, key)
        else:
            node.right = self._insert(node.right, key)
        return _rebalance(node)

    def _find_node(self, key: Any) -> _Node | None:
        cur = self._root
        while cur is not None:
            if key < cur.key:
                cur = cur.left
            elif cur.key < key:
                cur = cur.right
            else:
                return cur
        return None

    def find(self, key: Any) -> Any:
        """Return the stored key equal to ``key``, or None."""
        node = self._find_node(key)
        return node.key if node is not None else None

    def erase(self, key: Any) -> bool:
        """Remove one occurrence of ``key``; return False if absent."""
        if self._find_node(key) is None:
            return False
        self._root = self._erase(self._root, key)
        self._size -= 1
        return True

    def _erase(self, node: _Node | None, key: Any) -> _Node | None:
        if node is None:
            return None
        if key < node.key:
            node.left = self._erase(node.left, key)
        elif node.key < key:
            node.right = self._erase(node.right, key)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key = successor.key
            node.right = self._erase_min(node.right)
        return _rebalance(node)

    def _erase_min(self, node: _Node) -> _Node | None:
        if node.left is None:
            return node.right
        node.left = self._erase_min(node.left)
        return _rebalance(node)

    def height(self) -> int:
        return _height(self._root)

    def is_balanced(self) -> bool:
        """Check heights are consistent and every node's balance is within one."""

        def check(node: _Node | None) -> int | None:
            if node is None:
                return 0
            left, right = check(node.left), check(node.right)
            if left is None or right is None or abs(left - right) > 1:
                return None
            height = 1 + max(left, right)
            return height if height == node.height else None

        return check(self._root) is not None

    def __contains__(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def __iter__(self) -> Iterator[Any]:
        stack: list[_Node] = []
        cur = self._root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.key
            cur = cur.right

    def __len__(self) -> int:
        return self._size