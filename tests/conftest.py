from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared catalogue fixtures and a small node factory used across tests.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from sbomtree.domain.catalogue_models import ComponentRecord, DependencyNode  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def abc_records() -> List[Dict[str, Any]]:
    """Three-component catalogue: alpha, beta, gamma."""
    return [
        {"id": "a", "name": "alpha"},
        {"id": "b", "name": "beta"},
        {"id": "c", "name": "gamma"},
    ]


@pytest.fixture
def abc_edges() -> List[Dict[str, Any]]:
    """alpha depends on beta and gamma."""
    return [{"parentId": "a", "childId": ["b", "c"]}]


@pytest.fixture
def cyclonedx_bom() -> Dict[str, Any]:
    """
    A parsed CycloneDX-style document as an external parser would hand it over.

    app -> spring-core, jackson-databind
    jackson-databind -> jackson-core, jackson-annotations
    spring-core -> spring-jcl, jackson-core (diamond on jackson-core)
    plus one dangling edge and one dangling child.
    """
    return {
        "components": [
            {"bom-ref": "pkg:app", "name": "app", "version": "1.0", "type": "application"},
            {"bom-ref": "pkg:spring-core", "name": "spring-core", "version": "6.1.0",
             "type": "library", "scope": "required"},
            {"bom-ref": "pkg:spring-jcl", "name": "spring-jcl", "version": "6.1.0",
             "type": "library", "scope": "required"},
            {"bom-ref": "pkg:jackson-databind", "name": "Jackson-Databind", "version": "2.17.0",
             "type": "library", "scope": "required"},
            {"bom-ref": "pkg:jackson-core", "name": "jackson-core", "version": "2.17.0",
             "type": "library"},
            {"bom-ref": "pkg:jackson-annotations", "name": "jackson-annotations",
             "type": "library", "scope": "optional"},
        ],
        "dependencies": [
            {"ref": "pkg:app", "dependsOn": ["pkg:spring-core", "pkg:jackson-databind"]},
            {"ref": "pkg:jackson-databind",
             "dependsOn": ["pkg:jackson-core", "pkg:jackson-annotations", "pkg:missing"]},
            {"ref": "pkg:spring-core", "dependsOn": ["pkg:spring-jcl", "pkg:jackson-core"]},
            {"ref": "pkg:ghost", "dependsOn": ["pkg:app"]},
        ],
    }


def make_node(name: str, *children: DependencyNode) -> DependencyNode:
    """Build a node whose component id equals its name."""
    return DependencyNode(component=ComponentRecord(id=name, name=name), children=tuple(children))


@pytest.fixture
def node():
    """Expose the node factory to tests."""
    return make_node
