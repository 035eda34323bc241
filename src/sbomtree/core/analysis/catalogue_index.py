from __future__ import annotations

"""
Catalogue Index.

Normalizes the flat component catalogue into a read-only lookup table keyed
by component identifier. Duplicate identifiers are resolved by letting the
later entry win; entries without an identifier are kept aside as fallback
content for the nested-components build path.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from sbomtree.domain.catalogue_models import ComponentRecord, normalize_component
from sbomtree.domain.constants import UNKNOWN

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class CatalogueIndex(Mapping[str, ComponentRecord]):
    """
    Immutable id -> ComponentRecord mapping built from one catalogue load.

    Attributes:
        records: Every normalized record, in input order.
        unaddressable: Records without an id (not resolvable by edges).
    """

    def __init__(
            self,
            by_id: Mapping[str, ComponentRecord],
            records: Tuple[ComponentRecord, ...],
            unaddressable: Tuple[ComponentRecord, ...],
    ) -> None:
        self._by_id = MappingProxyType(dict(by_id))
        self.records = records
        self.unaddressable = unaddressable

    def __getitem__(self, component_id: str) -> ComponentRecord:
        return self._by_id[component_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"CatalogueIndex(ids={len(self._by_id)}, records={len(self.records)})"

    def resolve(self, component_id: Optional[str]) -> Optional[ComponentRecord]:
        """Return the record for an id, or None for absent/dangling ids."""
        if component_id is None:
            return None
        return self._by_id.get(component_id)


def build_catalogue_index(records: Optional[Iterable[Any]], unknown: str = UNKNOWN) -> CatalogueIndex:
    """
    Build the lookup table for a raw component catalogue.

    Last write wins for duplicate ids: the mapping is deterministic for a
    given input order, which is not the same as being correct for arbitrary
    inputs. Never raises.

    Args:
        records: Raw catalogue entries (mappings or ComponentRecord), any order.
        unknown: Sentinel used for missing display fields.

    Returns:
        CatalogueIndex: The read-only index.
    """
    by_id: Dict[str, ComponentRecord] = {}
    normalized = []
    unaddressable = []

    for raw in records or ():
        record = normalize_component(raw, unknown)
        normalized.append(record)

        if record.id is None:
            unaddressable.append(record)
            continue

        if record.id in by_id:
            logger.debug(f"Duplicate component id '{record.id}': later entry '{record.name}' replaces it.")
        by_id[record.id] = record

    logger.debug(
        f"Catalogue indexed: {len(by_id)} addressable, {len(unaddressable)} without id."
    )
    return CatalogueIndex(by_id, tuple(normalized), tuple(unaddressable))
