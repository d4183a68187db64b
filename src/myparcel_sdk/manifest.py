"""
Package manifest lookup used to build the SDK user agent.
"""

import json
from pathlib import Path
from typing import Iterable, Optional, Union

from .constants import SDK_NAME
from .log import get_logger

logger = get_logger("manifest")

# Relative to the working directory, first match wins
MANIFEST_PATHS = (
    "vendor/myparcelnl/sdk/composer.json",
    "composer.json",
)


def read_manifest_version(
    paths: Iterable[Union[str, Path]] = MANIFEST_PATHS,
) -> Optional[str]:
    """
    Read the SDK version from the first usable manifest.

    A manifest is a JSON object with ``name`` and ``version`` fields. Missing,
    unreadable or malformed files are skipped.

    Args:
        paths: Candidate manifest locations, tried in order

    Returns:
        The version without a leading ``v``, or ``None`` if no manifest has one
    """
    for candidate in paths:
        path = Path(candidate)
        if not path.is_file():
            continue

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping unreadable manifest {path}: {e}")
            continue

        if not isinstance(data, dict):
            logger.debug(f"Skipping manifest {path}: not a JSON object")
            continue

        version = data.get("version")
        if isinstance(version, str) and version:
            return version[1:] if version.startswith("v") else version

    return None


def build_user_agent(version: Optional[str]) -> str:
    """Return ``MyParcelNL-SDK/<version>``, with ``unknown`` when there is none."""
    return f"{SDK_NAME}/{version or 'unknown'}"
