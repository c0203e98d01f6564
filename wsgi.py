"""WSGI entry point for production deployment (gunicorn wsgi:app)."""

import sys
from pathlib import Path

BASE = Path(__file__).resolve().parent
sys.path.insert(0, str(BASE))

from server import create_app, load_settings

settings = load_settings(BASE)
app = create_app(settings)
print(f"[Server] WSGI app ready, data dir: {settings['DATA_DIR']}")
