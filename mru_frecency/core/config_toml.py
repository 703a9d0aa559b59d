"""TOML configuration file handling for mru-frecency.

Users can override the store settings in ``$XDG_CONFIG_HOME/mru-frecency/config.toml``:

    [frecency]
    max_entries = 5000
    lock_policy = "best_effort"

Environment variables (``MRU_FRECENCY_*``) take precedence over the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import tomli


def load_config(config_path: Optional[Path]) -> Dict[str, Any]:
    """Load a TOML configuration file.

    Args:
        config_path: Path to the TOML file.

    Returns:
        Dictionary with parsed configuration. Empty dict if the file is missing.

    Raises:
        RuntimeError: If the TOML file is invalid.
    """
    if config_path is None or not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        raise RuntimeError(f"Failed to load config from {config_path}: {e}") from e
