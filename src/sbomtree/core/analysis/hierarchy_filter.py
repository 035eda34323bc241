from __future__ import annotations

"""
Hierarchy-Preserving Filter.

Computes the sub-forest in which every node either matches the predicate
or leads to a node that does. A matching node keeps its whole subtree; a
non-matching ancestor keeps only the paths towards matches. The input
forest is never modified.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from sbomtree.domain.catalogue_models import DependencyNode, Forest

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_blank_filter(filter_text: Optional[str]) -> bool:
    """Return True if the filter text is None, empty or whitespace only."""
    return filter_text is None or not filter_text.strip()


def make_substring_predicate(filter_text: str, case_sensitive: bool = False) -> Predicate:
    """
    Build a 'name contains text' predicate.

    Surrounding whitespace of the filter text is ignored. Case-insensitive
    matching uses casefold on both sides.
    """
    needle = filter_text.strip()
    if case_sensitive:
        return lambda name: needle in name

    folded = needle.casefold()
    return lambda name: folded in name.casefold()


def apply_filter(forest: Forest, predicate: Union[Predicate, str, None]) -> Forest:
    """
    Filter a forest while preserving ancestor and descendant context.

    Args:
        forest: The original forest (left untouched).
        predicate: A name predicate, or filter text matched case-insensitively.
            Blank text returns the input forest itself.

    Returns:
        Forest: The filtered forest, original order preserved.
    """
    if predicate is None or isinstance(predicate, str):
        if is_blank_filter(predicate):
            return forest
        predicate = make_substring_predicate(predicate)

    filtered: List[DependencyNode] = []
    memo: Dict[int, Optional[DependencyNode]] = {}
    for root in forest:
        kept = _filter_node(root, predicate, memo)
        if kept is not None:
            filtered.append(kept)
    return tuple(filtered)


def filter_forest(forest: Forest, filter_text: Optional[str], config: Dict[str, Any]) -> Forest:
    """
    Apply filter text using the matching options of a validated config.

    Args:
        forest: The original forest.
        filter_text: Free text from the user-facing control.
        config: Normalized configuration (see core.validator).

    Returns:
        Forest: The filtered forest, or the input forest for blank text.
    """
    if is_blank_filter(filter_text):
        return forest

    predicate = make_substring_predicate(filter_text, bool(config.get("case_sensitive", False)))
    result = apply_filter(forest, predicate)
    logger.debug(f"Filter '{filter_text.strip()}' kept {len(result)} of {len(forest)} root(s).")
    return result

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _filter_node(
        node: DependencyNode,
        predicate: Predicate,
        memo: Dict[int, Optional[DependencyNode]],
) -> Optional[DependencyNode]:
    """
    Return the node as it appears in the filtered forest, or None if pruned.

    Walks the subtree with an explicit stack. Each frame holds a non-matching
    node, an iterator over its children and the children kept so far. Results
    for non-matching nodes are kept in 'memo' by node identity, so a subtree
    shared by several parents is filtered once.
    """
    if predicate(node.name):
        return node
    if id(node) in memo:
        return memo[id(node)]

    stack: List[Tuple[DependencyNode, Iterator[DependencyNode], List[DependencyNode]]] = [
        (node, iter(node.children), [])
    ]
    while stack:
        current, pending, kept = stack[-1]
        child = next(pending, None)

        if child is not None:
            if id(child) in memo:
                if memo[id(child)] is not None:
                    kept.append(memo[id(child)])
            elif predicate(child.name):
                kept.append(child)
            else:
                stack.append((child, iter(child.children), []))
            continue

        stack.pop()
        pruned = DependencyNode(component=current.component, children=tuple(kept)) if kept else None
        memo[id(current)] = pruned
        if stack and pruned is not None:
            stack[-1][2].append(pruned)

    return memo[id(node)]
