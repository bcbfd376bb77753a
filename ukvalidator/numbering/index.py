"""Digit trie over allocation rules.

Each node maps one digit to a child node and holds the rules whose prefix
ends exactly at that node.  Walking a number from the root therefore
visits every rule whose prefix is an initial substring of the number,
shortest prefix first.

The index is built once per rule set and never mutated afterwards; it is
safe to share between any number of concurrent readers.  Malformed rules
(empty or non-digit prefixes) are not rejected here; validation belongs
to :mod:`ukvalidator.ruleset.store`.
"""
from __future__ import annotations

from collections.abc import Iterable

from ukvalidator.numbering.rule import PrefixRule


class PrefixNode:
    """One trie node: digit -> child, plus rules terminating here."""

    __slots__ = ("children", "rules")

    def __init__(self) -> None:
        self.children: dict[str, PrefixNode] = {}
        self.rules: tuple[PrefixRule, ...] = ()


class PrefixIndex:
    """Read-only digit trie produced by :func:`build_index`."""

    def __init__(self, root: PrefixNode, rule_count: int, node_count: int) -> None:
        self._root = root
        self.rule_count = rule_count
        self.node_count = node_count

    def walk(self, digits: str) -> list[PrefixRule]:
        """Return every rule whose prefix is a prefix of *digits*.

        Rules come back in traversal order: shorter prefixes first, then
        input order within a node.  The walk stops at the first digit with
        no child.
        """
        matched: list[PrefixRule] = []
        node = self._root
        for digit in digits:
            child = node.children.get(digit)
            if child is None:
                break
            node = child
            matched.extend(node.rules)
        return matched

    def find(self, digits: str) -> PrefixNode | None:
        """Return the node reached by consuming all of *digits*, if any."""
        node = self._root
        for digit in digits:
            child = node.children.get(digit)
            if child is None:
                return None
            node = child
        return node

    def has_rule_under(self, digits: str) -> bool:
        """Return ``True`` if any rule lives at or below the node for *digits*."""
        node = self.find(digits)
        if node is None:
            return False
        stack = [node]
        while stack:
            current = stack.pop()
            if current.rules:
                return True
            stack.extend(current.children.values())
        return False

    def __len__(self) -> int:
        return self.rule_count


def build_index(rules: Iterable[PrefixRule]) -> PrefixIndex:
    """Build a :class:`PrefixIndex` from *rules*.

    A node may collect several rules (e.g. the same prefix with differing
    length or status); they keep their input order.
    """
    root = PrefixNode()
    rule_count = 0
    node_count = 1
    for rule in rules:
        node = root
        for digit in rule.prefix:
            child = node.children.get(digit)
            if child is None:
                child = PrefixNode()
                node.children[digit] = child
                node_count += 1
            node = child
        node.rules = node.rules + (rule,)
        rule_count += 1
    return PrefixIndex(root, rule_count=rule_count, node_count=node_count)
