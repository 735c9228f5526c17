"""Test environment; import before anything under `app` so settings pick it up."""

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault(
    "DOCUMENT_DB_PATH",
    str(Path(tempfile.gettempdir()) / f"alumni-engine-tests-{os.getpid()}" / "documents.db"),
)
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
