"""CLI configuration and paths."""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("WIKISOCION_DATA_DIR", PROJECT_ROOT / "data"))

# API settings
API_HOST = "localhost"
API_PORT = 8000
