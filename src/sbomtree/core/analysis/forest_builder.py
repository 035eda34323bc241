from __future__ import annotations

"""
Dependency Forest Builder.

Turns the catalogue index plus the dependency edges into an ordered forest
of display nodes. When the catalogue carries no edges, the components' own
inline nesting is used instead. Malformed references degrade to omission;
building never raises.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from sbomtree.core.analysis.catalogue_index import CatalogueIndex
from sbomtree.domain.catalogue_models import (
    ComponentRecord,
    DependencyEdge,
    DependencyNode,
    Forest,
    normalize_component,
    normalize_edges,
    sort_nodes,
)
from sbomtree.domain.constants import UNKNOWN
from sbomtree.domain.graph_models import EdgeGraph, GraphSource, NestedComponents

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def select_graph_source(
        edges: Optional[Iterable[Any]],
        components: Iterable[Any],
        unknown: str = UNKNOWN,
) -> GraphSource:
    """
    Decide once which shape drives the build.

    Args:
        edges: Raw or normalized dependency edges (may be None).
        components: Raw or normalized top-level components.
        unknown: Sentinel used for missing display fields.

    Returns:
        GraphSource: EdgeGraph if any edge is present, NestedComponents otherwise.
    """
    normalized_edges = normalize_edges(edges)
    if normalized_edges:
        return EdgeGraph(edges=normalized_edges)
    return NestedComponents(components=tuple(normalize_component(c, unknown) for c in components))


def build_forest(
        index: CatalogueIndex,
        edges: Optional[Iterable[Any]] = None,
        raw_components: Optional[Iterable[Any]] = None,
        *,
        max_depth: Optional[int] = None,
        unknown: str = UNKNOWN,
) -> Forest:
    """
    Build the ordered dependency forest for one catalogue load.

    Args:
        index: Lookup table produced by build_catalogue_index.
        edges: Dependency edges; empty or None selects the nested fallback.
        raw_components: Top-level components for the fallback (defaults to index.records).
        max_depth: Optional cap on edge-mode expansion (roots are depth 0).
        unknown: Sentinel used for missing display fields.

    Returns:
        Forest: Roots sorted by name, each child sequence sorted likewise.
    """
    components = index.records if raw_components is None else raw_components
    source = select_graph_source(edges, components, unknown)

    if isinstance(source, EdgeGraph):
        forest = _build_from_edges(index, source.edges, max_depth)
    else:
        forest = _build_from_components(source.components)

    logger.info(f"Dependency forest built from {source.kind}: {len(forest)} root(s).")
    return forest

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (EDGE-DRIVEN MODE)
# -----------------------------------------------------------------------------

def _fold_edges(
        index: CatalogueIndex,
        edges: Tuple[DependencyEdge, ...],
) -> Tuple[List[str], Dict[str, List[str]], Dict[str, int]]:
    """
    Accumulate root order and per-parent child lists from the edge sequence.

    Dangling parents drop the whole edge; dangling children are skipped.
    Edges sharing a parent extend the same child list. Also returns the
    strongly connected component of every referenced id.
    """
    root_ids: List[str] = []
    children_of: Dict[str, List[str]] = {}

    for edge in edges:
        parent = index.resolve(edge.parent_id)
        if parent is None:
            logger.debug(f"Skipping edge with unresolved parent '{edge.parent_id}'.")
            continue

        parent_id = parent.identity
        if parent_id not in children_of:
            children_of[parent_id] = []
            root_ids.append(parent_id)

        child_list = children_of[parent_id]
        for child_id in edge.child_ids:
            if index.resolve(child_id) is None:
                logger.debug(f"Skipping unresolved child '{child_id}' of '{parent_id}'.")
                continue
            if child_id not in child_list:
                child_list.append(child_id)

    return root_ids, children_of, _strongly_connected(children_of)


def _strongly_connected(children_of: Dict[str, List[str]]) -> Dict[str, int]:
    """
    Label every id with its strongly connected component (iterative Tarjan).

    Ids sharing a label depend on each other through some cycle; a
    self-dependency puts an id in the same component as itself.
    """
    order: Dict[str, int] = {}
    low: Dict[str, int] = {}
    component_of: Dict[str, int] = {}
    on_stack: Set[str] = set()
    stack: List[str] = []
    next_label = 0

    def visit(node_id: str) -> Tuple[str, Iterator[str]]:
        order[node_id] = low[node_id] = len(order)
        stack.append(node_id)
        on_stack.add(node_id)
        return node_id, iter(children_of.get(node_id, ()))

    for start in children_of:
        if start in order:
            continue

        work = [visit(start)]
        while work:
            node_id, pending = work[-1]
            descended = False
            for child_id in pending:
                if child_id not in order:
                    work.append(visit(child_id))
                    descended = True
                    break
                if child_id in on_stack:
                    low[node_id] = min(low[node_id], order[child_id])
            if descended:
                continue

            work.pop()
            if work:
                parent_id = work[-1][0]
                low[parent_id] = min(low[parent_id], low[node_id])

            if low[node_id] == order[node_id]:
                label = next_label
                next_label += 1
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component_of[member] = label
                    if member == node_id:
                        break

    return component_of


@dataclass
class _Frame:
    """One pending node of the post-order build walk."""
    component_id: str
    depth: int
    cursor: int = 0
    children: List[DependencyNode] = field(default_factory=list)


def _build_from_edges(
        index: CatalogueIndex,
        edges: Tuple[DependencyEdge, ...],
        max_depth: Optional[int],
) -> Forest:
    root_ids, children_of, component_of = _fold_edges(index, edges)

    # A child on a cycle with its parent is shown as a leaf, so expansion only
    # follows edges between components and every subtree depends on
    # (id, depth) alone. Built nodes are shared between parents.
    built: Dict[Tuple[str, int], DependencyNode] = {}

    def key(component_id: str, depth: int) -> Tuple[str, int]:
        return component_id, depth if max_depth is not None else 0

    def expandable(frame: _Frame) -> List[str]:
        if max_depth is not None and frame.depth >= max_depth:
            return []
        return children_of.get(frame.component_id, [])

    def materialize(root_id: str) -> DependencyNode:
        root_key = key(root_id, 0)
        if root_key in built:
            return built[root_key]

        stack = [_Frame(root_id, 0)]
        while stack:
            frame = stack[-1]
            child_ids = expandable(frame)

            if frame.cursor < len(child_ids):
                child_id = child_ids[frame.cursor]
                frame.cursor += 1

                if component_of[child_id] == component_of[frame.component_id]:
                    logger.debug(f"Dependency cycle through '{child_id}' shown as leaf.")
                    frame.children.append(DependencyNode(component=index[child_id]))
                    continue

                cached = built.get(key(child_id, frame.depth + 1))
                if cached is not None:
                    frame.children.append(cached)
                else:
                    stack.append(_Frame(child_id, frame.depth + 1))
                continue

            stack.pop()
            node = DependencyNode(component=index[frame.component_id], children=sort_nodes(frame.children))
            built[key(frame.component_id, frame.depth)] = node
            if stack:
                stack[-1].children.append(node)

        return built[root_key]

    return sort_nodes(materialize(root_id) for root_id in root_ids)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS (NESTED FALLBACK MODE)
# -----------------------------------------------------------------------------

def _build_from_components(components: Tuple[ComponentRecord, ...]) -> Forest:
    """One root per top-level component, its inline components one level below."""
    roots: List[DependencyNode] = []
    seen_ids: Set[str] = set()
    seen_names: Set[str] = set()
    idless_names: Set[str] = set()

    for record in components:
        if _is_present(record, seen_ids, seen_names, idless_names):
            logger.debug(f"Component '{record.name}' already present as root; skipped.")
            continue
        if record.id is None:
            idless_names.add(record.name)
        else:
            seen_ids.add(record.id)
        seen_names.add(record.name)

        children = sort_nodes(DependencyNode(component=child) for child in record.components)
        roots.append(DependencyNode(component=record, children=children))

    return sort_nodes(roots)


def _is_present(
        record: ComponentRecord,
        seen_ids: Set[str],
        seen_names: Set[str],
        idless_names: Set[str],
) -> bool:
    # Compare by id when both sides carry one, by name otherwise
    if record.id is None:
        return record.name in seen_names
    return record.id in seen_ids or record.name in idless_names
