from __future__ import annotations

"""
Configuration Domain Defaults.

Provides the default runtime configuration driving the forest builder and
the hierarchy filter. Configuration travels as a plain dictionary and is
normalized by 'sbomtree.core.validator' before use.
"""

from typing import Any, Dict

from sbomtree.domain.constants import UNKNOWN

DEFAULT_LOG_LEVEL = "INFO"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Normalization
        "unknown_label": UNKNOWN,

        # Forest building
        "max_depth": None,

        # Filtering
        "case_sensitive": False,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
    }
