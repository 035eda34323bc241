from __future__ import annotations

"""
Forest traversal and counting helpers.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from sbomtree.core.analysis.hierarchy_filter import Predicate
from sbomtree.domain.catalogue_models import DependencyNode, Forest


def iter_forest(forest: Forest) -> Iterator[Tuple[int, DependencyNode]]:
    """Yield (depth, node) pairs in display order (pre-order, roots at depth 0)."""
    stack: List[Tuple[int, DependencyNode]] = [(0, root) for root in reversed(forest)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        stack.extend((depth + 1, child) for child in reversed(node.children))


def count_nodes(forest: Forest) -> int:
    return _weighted_total(forest, lambda node: 1)


def count_matches(forest: Forest, predicate: Predicate) -> int:
    """Number of nodes whose own name satisfies the predicate."""
    return _weighted_total(forest, lambda node: 1 if predicate(node.name) else 0)


def total_dependencies(edges: Optional[Iterable[Any]], components: Optional[Iterable[Any]]) -> int:
    """
    Size of the catalogue's dependency list.

    The number of edges when the catalogue has any, otherwise the number of
    top-level components.
    """
    edge_list = list(edges or ())
    if edge_list:
        return len(edge_list)
    return len(list(components or ()))


def _weighted_total(forest: Forest, weight: Callable[[DependencyNode], int]) -> int:
    """
    Sum 'weight' over every displayed node of the forest.

    A node object reachable from several parents is displayed once per
    parent; its subtree total is computed once and reused by identity.
    """
    totals: Dict[int, int] = {}
    for root in forest:
        stack: List[Tuple[DependencyNode, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if id(node) in totals:
                continue
            if expanded:
                totals[id(node)] = weight(node) + sum(totals[id(child)] for child in node.children)
            else:
                stack.append((node, True))
                stack.extend((child, False) for child in node.children if id(child) not in totals)
    return sum(totals[id(root)] for root in forest)
