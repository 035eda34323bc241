from __future__ import annotations

"""
Unit tests for Tree View factories.
"""

import dataclasses

import pytest

from sbomtree.domain.constants import EMPTY_CATALOGUE_MESSAGE
from sbomtree.domain.tree_view_models import TreeView, create_filtered_view, create_full_view


def test_full_view_of_empty_forest_carries_message() -> None:
    view = create_full_view((), node_count=0, total_dependencies=0)

    assert isinstance(view, TreeView)
    assert view.empty
    assert not view.filtered
    assert view.message == EMPTY_CATALOGUE_MESSAGE


def test_full_view_counts_every_node_as_match(node) -> None:
    view = create_full_view((node("a", node("b")),), node_count=2, total_dependencies=1)

    assert view.match_count == 2
    assert view.message == ""


def test_filtered_view_message_uses_trimmed_text() -> None:
    view = create_filtered_view((), "  zlib ", node_count=0, match_count=0, total_dependencies=4)

    assert view.filter_text == "  zlib "
    assert view.message == "No dependencies match 'zlib'."


def test_tree_view_is_frozen() -> None:
    view = create_full_view((), 0, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.empty = False  # type: ignore[misc]
