"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/parcelstore/global_config.py, go up two levels: src/parcelstore -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "parcelstore"

# Database directories
DB_DIR: Path = PROJECT_ROOT / "db"
DEFAULT_DB_PATH: Path = DB_DIR / f"{PROJECT_NAME}-dev.sqlite"

# SQL directory (shipped inside the package so installed copies can find it)
SQL_DIR: Path = PACKAGE_ROOT / "sql"
