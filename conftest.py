from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

if BACKEND_DIR.exists():
    backend_path = str(BACKEND_DIR)
    if backend_path not in sys.path:
        sys.path.insert(0, backend_path)


def _ensure_test_env() -> None:
    # Unit tests never reach a real translation endpoint or Redis.
    os.environ.setdefault("ENVIRONMENT", "test")
    os.environ.setdefault("TRANSLATION_PROVIDER", "disabled")
    os.environ.setdefault("TRANSLATION_CACHE_BACKEND", "memory")
    os.environ.setdefault("LOG_LEVEL", "WARNING")
    os.environ.pop("LIBRE_TRANSLATE_URL", None)


_ensure_test_env()
