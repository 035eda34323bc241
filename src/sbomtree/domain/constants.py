from __future__ import annotations

"""
Domain Constants.

Centralizes the sentinel values, user-facing messages and the raw-key
aliases recognised when normalizing catalogue entries handed over by an
external SBOM parser.
"""

from typing import Tuple

# Sentinel for any scalar component field that is absent in the source data
UNKNOWN = "Unknown"

EMPTY_CATALOGUE_MESSAGE = "No dependencies found in the BOM."

# -----------------------------------------------------------------------------
# RAW KEY ALIASES
# -----------------------------------------------------------------------------
COMPONENT_ID_KEYS: Tuple[str, ...] = ("id", "bom-ref", "bomRef", "bom_ref")
NESTED_COMPONENTS_KEY = "components"

EDGE_PARENT_KEYS: Tuple[str, ...] = ("parentId", "parent_id", "ref")
EDGE_CHILDREN_KEYS: Tuple[str, ...] = (
    "childId",
    "childIds",
    "child_ids",
    "dependsOn",
    "dependencies",
)
EDGE_CHILD_REF_KEYS: Tuple[str, ...] = ("ref", "id", "bom-ref")
