from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

DB_ENV_VAR = "TARRIER_DB"
DATA_HOME = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
DATA_DIR = DATA_HOME / "tarrier"
DB_FILE = DATA_DIR / "tarrier.db"


def resolve_db_path(override: Optional[Union[str, Path]] = None) -> Path:
    """Pick the database path: explicit override, then env var, then default."""
    if override:
        return Path(override).expanduser()
    from_env = os.environ.get(DB_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return DB_FILE
