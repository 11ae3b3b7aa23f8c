"""Resolve ``*_FILE`` environment variables (Docker/Kubernetes secrets).

Connection strings for database checks usually carry credentials, so
``ENGINE_BOOTSTRAP_FILE`` and friends may be provided as mounted files.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, MutableMapping, Optional

from healthwatch.shared.logging import get_logger

logger = get_logger(__name__)

FILE_SUFFIX = "_FILE"


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Expose the content of every ``KEY_FILE`` entry as ``KEY``.

    Keys that are already set are left alone. Unreadable files are logged
    and skipped.

    Returns:
        The keys that were populated.
    """
    env = os.environ if environ is None else environ
    loaded: List[str] = []

    for key, file_path in list(env.items()):
        if not key.endswith(FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(FILE_SUFFIX)]
        if env.get(target_key):
            continue
        try:
            env[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                key=key,
                path=file_path,
                error=str(exc),
            )
            continue
        loaded.append(target_key)

    return loaded
