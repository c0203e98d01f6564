"""
Local server for the Finboard dashboard API.
Run: python server.py
Then open http://localhost:3000 — pages read and save their tables through /api/*.
Each resource is one CSV file; saves overwrite (or append to) that file.
"""

import os
import sys
from pathlib import Path

BASE = Path(__file__).resolve().parent
sys.path.insert(0, str(BASE))

# Load .env so PORT / DATA_DIR can live outside the shell
try:
    from dotenv import load_dotenv
    load_dotenv(BASE / ".env")
except ImportError:
    pass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def load_settings(base: Path = BASE) -> dict:
    """Collect server settings from the environment."""
    data_dir = Path(os.environ.get("DATA_DIR") or base)
    static_dir = Path(os.environ.get("STATIC_DIR") or base)
    config_path = Path(os.environ.get("RESOURCES_CONFIG") or base / "resources.json")
    return {
        "BASE": base,
        "DATA_DIR": data_dir,
        "STATIC_DIR": static_dir,
        "RESOURCES_CONFIG": config_path,
        "SEED_SAMPLE_DATA": _env_flag("SEED_SAMPLE_DATA"),
        "PORT": int(os.environ.get("PORT", 3000)),
        "HOST": os.environ.get("HOST", "0.0.0.0"),
    }


def create_app(settings: dict, mirror=None):
    """Build the Flask app: resolve resources, optionally seed files, wire routes."""
    from flask import Flask
    from resources import load_resources, seed_resource_files
    from routes import bp, init_routes

    resources = load_resources(settings.get("RESOURCES_CONFIG"), settings["DATA_DIR"])
    if settings.get("SEED_SAMPLE_DATA"):
        seed_resource_files(resources)

    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False
    app.url_map.strict_slashes = False

    init_routes({
        "STATIC_DIR": settings["STATIC_DIR"],
        "RESOURCES": resources,
        "MIRROR": mirror,
    })
    app.register_blueprint(bp)
    return app


def log_startup(settings: dict, resources: list, routes: list) -> None:
    print(f"[Server] Directory: {settings['BASE']}")
    print("[Server] CSV files:")
    for r in resources:
        mark = "ok" if r["path"].exists() else "missing"
        print(f"   {r['name']}: {r['path']} ({mark}, {r['mode']})")
    print("[Server] Routes:")
    for line in routes:
        print(f"   {line}")


def main():
    try:
        import flask  # noqa: F401
    except ImportError:
        print("Flask is required. Run: pip install flask")
        sys.exit(1)

    settings = load_settings()
    try:
        app = create_app(settings)
    except (ValueError, OSError) as e:
        print(f"[Server] Bad resource configuration: {e}")
        sys.exit(1)

    import routes

    log_startup(settings, routes.RESOURCES, routes.route_table())
    host, port = settings["HOST"], settings["PORT"]
    print(f"Finboard: http://{host}:{port}")
    print("Ctrl+C to stop.")
    app.run(host=host, port=port, debug=False, use_reloader=False)


if __name__ == "__main__":
    main()
