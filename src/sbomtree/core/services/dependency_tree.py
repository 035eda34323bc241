from __future__ import annotations

"""
Dependency Tree Service.

Loads a catalogue once (index + forest) and serves filtered views of it on
every filter-text change. The service holds only immutable state, so a
single instance can answer concurrent view requests.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from sbomtree.core.analysis.catalogue_index import CatalogueIndex, build_catalogue_index
from sbomtree.core.analysis.forest_builder import build_forest
from sbomtree.core.analysis.forest_metrics import count_matches, count_nodes, total_dependencies
from sbomtree.core.analysis.hierarchy_filter import (
    apply_filter,
    is_blank_filter,
    make_substring_predicate,
)
from sbomtree.core.validator import validate_config
from sbomtree.domain.catalogue_models import Forest
from sbomtree.domain.tree_view_models import TreeView, create_filtered_view, create_full_view
from sbomtree.infra.logging import LoggingConfig

logger = logging.getLogger(__name__)


class DependencyTreeService:
    """
    Load-once / filter-many facade over the catalogue index, builder and filter.

    Attributes:
        index: The catalogue index of the loaded catalogue.
        forest: The full, sorted dependency forest.
        total_dependencies: Number of dependency entries (or components without edges).
        config: Normalized configuration in effect.
    """

    def __init__(
            self,
            index: CatalogueIndex,
            forest: Forest,
            total: int,
            config: Dict[str, Any],
    ) -> None:
        self.index = index
        self.forest = forest
        self.total_dependencies = total
        self.config = config
        self._node_count = count_nodes(forest)

    @classmethod
    def load(
            cls,
            records: Optional[Iterable[Any]],
            edges: Optional[Iterable[Any]] = None,
            config: Optional[Dict[str, Any]] = None,
    ) -> "DependencyTreeService":
        """
        Build the index and the forest for one catalogue load.

        Args:
            records: Raw component catalogue.
            edges: Raw dependency edges (None or empty selects the nested fallback).
            config: Optional configuration overrides.

        Returns:
            DependencyTreeService: A service bound to the loaded catalogue.
        """
        cfg, warnings = validate_config(config)
        for w in warnings:
            logger.warning(w)

        record_list = list(records or ())
        edge_list = list(edges or ())

        index = build_catalogue_index(record_list, unknown=cfg["unknown_label"])
        forest = build_forest(
            index,
            edge_list,
            max_depth=cfg["max_depth"],
            unknown=cfg["unknown_label"],
        )
        total = total_dependencies(edge_list, record_list)

        logger.info(f"Catalogue loaded: {len(record_list)} component(s), total dependencies: {total}.")
        return cls(index, forest, total, cfg)

    def logging_config(self, console: bool = True, log_file: Optional[str] = None) -> LoggingConfig:
        """
        Logging settings for the host application, carrying the configured log_level.

        The library never installs handlers itself; the host passes the result
        to configure_logging once at startup.
        """
        return LoggingConfig.from_app_config(self.config, console=console, log_file=log_file)

    @property
    def is_empty(self) -> bool:
        return not self.forest

    def view(self, filter_text: Optional[str] = None) -> TreeView:
        """
        Compute what the rendering collaborator should display for a filter text.

        Blank text yields the full forest unchanged.
        """
        if is_blank_filter(filter_text):
            return create_full_view(self.forest, self._node_count, self.total_dependencies, filter_text or "")

        predicate = make_substring_predicate(filter_text, self.config["case_sensitive"])
        filtered = apply_filter(self.forest, predicate)
        return create_filtered_view(
            filtered,
            filter_text,
            node_count=count_nodes(filtered),
            match_count=count_matches(filtered, predicate),
            total_dependencies=self.total_dependencies,
        )
