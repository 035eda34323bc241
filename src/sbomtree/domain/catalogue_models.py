from __future__ import annotations

"""
Catalogue Domain Data Models.

Defines the immutable value objects exchanged between the catalogue source,
the forest builder and the hierarchy filter, together with the single
normalization step that turns loosely-shaped parser output into records
without nullable display fields.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from sbomtree.domain.constants import (
    COMPONENT_ID_KEYS,
    EDGE_CHILD_REF_KEYS,
    EDGE_CHILDREN_KEYS,
    EDGE_PARENT_KEYS,
    NESTED_COMPONENTS_KEY,
    UNKNOWN,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ComponentRecord:
    """
    One cataloged software unit with every display field resolved.

    Attributes:
        id: Opaque identifier used for edge resolution (None if absent).
        name: Display name, also the sort key (compared case-insensitively).
        version: Version string.
        type: Classification such as library, application or framework.
        scope: Usage scope such as required, optional or excluded.
        components: Embedded sub-components (fallback mode only).
    """
    id: Optional[str] = None
    name: str = UNKNOWN
    version: str = UNKNOWN
    type: str = UNKNOWN
    scope: str = UNKNOWN
    components: Tuple["ComponentRecord", ...] = field(default_factory=tuple)

    @property
    def identity(self) -> str:
        """Key used to detect the same component twice among roots."""
        return self.id if self.id is not None else self.name

    def sort_key(self) -> str:
        return self.name.casefold()


@dataclass(frozen=True)
class DependencyEdge:
    """
    Directed 'parent depends on children' relationship.

    Attributes:
        parent_id: Identifier of the depending component.
        child_ids: Ordered identifiers of its direct dependencies.
    """
    parent_id: Optional[str]
    child_ids: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DependencyNode:
    """
    Display-tree node wrapping a resolved component and its ordered children.
    """
    component: ComponentRecord
    children: Tuple["DependencyNode", ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.component.name

    @property
    def version(self) -> str:
        return self.component.version

    @property
    def type(self) -> str:
        return self.component.type

    @property
    def scope(self) -> str:
        return self.component.scope

    @property
    def identity(self) -> str:
        return self.component.identity

    @property
    def is_leaf(self) -> bool:
        return not self.children


# Ordered collection of independent rooted trees
Forest = Tuple[DependencyNode, ...]


def sort_nodes(nodes: Iterable[DependencyNode]) -> Forest:
    """Order nodes by name, case-insensitively, keeping input order on ties."""
    return tuple(sorted(nodes, key=lambda node: node.component.sort_key()))

# -----------------------------------------------------------------------------
# NORMALIZATION
# -----------------------------------------------------------------------------

def normalize_component(raw: Any, unknown: str = UNKNOWN) -> ComponentRecord:
    """
    Materialize a ComponentRecord from raw catalogue input.

    Accepts an existing ComponentRecord (returned untouched) or a mapping
    shaped like a parsed SBOM component. Missing, null or blank scalar
    fields are replaced by the sentinel. Never raises.

    Args:
        raw: The raw catalogue entry.
        unknown: Sentinel used for missing display fields.

    Returns:
        ComponentRecord: A record with no nullable display fields.
    """
    if isinstance(raw, ComponentRecord):
        return raw

    if not isinstance(raw, Mapping):
        logger.debug(f"Unusable catalogue entry of type {type(raw).__name__}; using placeholder.")
        return ComponentRecord(name=unknown, version=unknown, type=unknown, scope=unknown)

    nested_raw = raw.get(NESTED_COMPONENTS_KEY)
    nested: Tuple[ComponentRecord, ...] = ()
    if isinstance(nested_raw, (list, tuple)):
        nested = tuple(normalize_component(item, unknown) for item in nested_raw)

    return ComponentRecord(
        id=_first_text(raw, COMPONENT_ID_KEYS),
        name=_as_text(raw.get("name")) or unknown,
        version=_as_text(raw.get("version")) or unknown,
        type=_as_text(raw.get("type")) or unknown,
        scope=_as_text(raw.get("scope")) or unknown,
        components=nested,
    )


def normalize_edge(raw: Any) -> Optional[DependencyEdge]:
    """
    Materialize a DependencyEdge from raw input.

    Child entries may be plain identifiers or mappings carrying a 'ref'.
    Unusable child entries are dropped.

    Returns:
        Optional[DependencyEdge]: None when the entry is not edge-shaped at all.
    """
    if isinstance(raw, DependencyEdge):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug(f"Ignoring dependency entry of type {type(raw).__name__}.")
        return None

    children_raw: Any = None
    for key in EDGE_CHILDREN_KEYS:
        if raw.get(key) is not None:
            children_raw = raw[key]
            break

    if isinstance(children_raw, (str, Mapping)):
        children_raw = [children_raw]

    child_ids = []
    if isinstance(children_raw, (list, tuple)):
        for child in children_raw:
            child_id = _as_text(child) if not isinstance(child, Mapping) else _first_text(child, EDGE_CHILD_REF_KEYS)
            if child_id:
                child_ids.append(child_id)

    return DependencyEdge(parent_id=_first_text(raw, EDGE_PARENT_KEYS), child_ids=tuple(child_ids))


def normalize_edges(raw_edges: Optional[Iterable[Any]]) -> Tuple[DependencyEdge, ...]:
    """Normalize a raw edge sequence, dropping entries that are not edges."""
    if not raw_edges:
        return ()
    edges = (normalize_edge(item) for item in raw_edges)
    return tuple(edge for edge in edges if edge is not None)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _as_text(value: Any) -> str:
    """Coerce a scalar to a stripped string; anything else becomes ''."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _first_text(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    for key in keys:
        text = _as_text(raw.get(key))
        if text:
            return text
    return None
