"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Larger or more specialized modules should define their own `config.py`
files that build on top of these anchors (see `warbler.mfcc.config`).
Smaller modules can import directly from global_config.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# PROJECT_ROOT is the repo root (where pyproject.toml and data/ live)
# From src/warbler/global_config.py, go up two levels: src/warbler -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "warbler"
PACKAGE_NAME = "warbler"


# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DIR: Path = DATA_DIR / "raw"
RAW_AUDIO_DIR: Path = RAW_DIR / "audio"
DERIVED_DIR: Path = DATA_DIR / "derived"
FEATURES_DIR: Path = DERIVED_DIR / "features"
DATASETS_DIR: Path = DERIVED_DIR / "datasets"

# Logs directories
LOGS_DIR: Path = DATA_DIR / "logs"
DERIVED_LOGS_DIR: Path = LOGS_DIR / "derived"
