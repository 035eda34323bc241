from __future__ import annotations

"""
Tree View Domain Models.

Defines the result object handed to the rendering collaborator on every
filter change, and the factory functions that build it.
"""

from dataclasses import dataclass

from sbomtree.domain.catalogue_models import Forest
from sbomtree.domain.constants import EMPTY_CATALOGUE_MESSAGE

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeView:
    """
    Snapshot of the dependency forest as it should currently be displayed.

    Attributes:
        forest: Roots to display (filtered or original).
        filter_text: The raw filter text that produced this view.
        filtered: False when the filter short-circuited to the full forest.
        node_count: Number of nodes in 'forest', all levels included.
        match_count: Nodes whose own name matched (equals node_count if unfiltered).
        total_dependencies: Size of the loaded catalogue's dependency list.
        empty: True when there is nothing to display.
        message: Explanation for an empty view, '' otherwise.
    """
    forest: Forest
    filter_text: str = ""
    filtered: bool = False
    node_count: int = 0
    match_count: int = 0
    total_dependencies: int = 0
    empty: bool = True
    message: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_full_view(forest: Forest, node_count: int, total_dependencies: int, filter_text: str = "") -> TreeView:
    """Create the unfiltered view of a loaded catalogue."""
    empty = not forest
    return TreeView(
        forest=forest,
        filter_text=filter_text,
        filtered=False,
        node_count=node_count,
        match_count=node_count,
        total_dependencies=total_dependencies,
        empty=empty,
        message=EMPTY_CATALOGUE_MESSAGE if empty else "",
    )


def create_filtered_view(
        forest: Forest,
        filter_text: str,
        node_count: int,
        match_count: int,
        total_dependencies: int,
) -> TreeView:
    """Create the view produced by a non-blank filter."""
    empty = not forest
    return TreeView(
        forest=forest,
        filter_text=filter_text,
        filtered=True,
        node_count=node_count,
        match_count=match_count,
        total_dependencies=total_dependencies,
        empty=empty,
        message=f"No dependencies match '{filter_text.strip()}'." if empty else "",
    )
