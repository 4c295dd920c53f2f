# File: backend/tests/conftest.py
# Version: v0.1.0
"""
Test bootstrap:
- put the repo root on sys.path so 'backend.*' imports work without an install;
- point the app at a throwaway SQLite file and enable schema auto-heal
  BEFORE any backend module reads its settings.
"""
import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_DB_DIR = Path(tempfile.mkdtemp(prefix="lambdaguide-tests-"))
os.environ.setdefault("DB_URL", f"sqlite:///{(_DB_DIR / 'test.db').as_posix()}")
os.environ.setdefault("SCHEMA_AUTOHEAL", "true")
