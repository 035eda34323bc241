from __future__ import annotations

"""
Graph Source Models.

The forest can be built from two differently shaped inputs. They are
represented as a tagged choice that is resolved once, when the builder is
entered, so each traversal only ever sees its own shape.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from sbomtree.domain.catalogue_models import ComponentRecord, DependencyEdge


@dataclass(frozen=True)
class EdgeGraph:
    """Explicit dependency edges referencing catalogue ids."""
    edges: Tuple[DependencyEdge, ...]

    kind = "edges"


@dataclass(frozen=True)
class NestedComponents:
    """Components carrying their direct sub-components inline."""
    components: Tuple[ComponentRecord, ...]

    kind = "nested"


GraphSource = Union[EdgeGraph, NestedComponents]
