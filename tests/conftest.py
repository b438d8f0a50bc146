# pyright: reportMissingImports=false
import json
import os
import sys

import pytest

# Ensure both project root (for `src.*` imports) and src/ (for top-level `utils`, `config`) are on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
SRC_ABS = os.path.abspath(os.path.join(PROJECT_ROOT, "src"))
if SRC_ABS not in sys.path:
    sys.path.insert(0, SRC_ABS)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    # Keep a developer's .env and shell settings out of the tests
    for key in list(os.environ):
        if key.startswith("THEMEICONS_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("FLASK_ENV", "PORT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROJECT_DIR", str(tmp_path))


class StaticResolver:
    """Icon URL resolver returning a fixed sprite URL."""

    def __init__(self, url="https://example.com/icons.svg"):
        self.url = url
        self.calls = 0

    def get_icon_url(self):
        self.calls += 1
        return self.url


@pytest.fixture()
def static_resolver():
    return StaticResolver()


@pytest.fixture()
def public_dir(tmp_path):
    """A public directory with a sprite and a Mix manifest."""
    root = tmp_path / "public"
    icons = root / "build" / "icons"
    icons.mkdir(parents=True)
    (icons / "icons.svg").write_text(
        '<svg xmlns="http://www.w3.org/2000/svg"><symbol id="search" viewBox="0 0 24 24"/></svg>'
    )
    (root / "mix-manifest.json").write_text(
        json.dumps({"/build/icons/icons.svg": "/build/icons/icons.svg?id=abc123"})
    )
    return root


@pytest.fixture()
def theme_config(public_dir):
    import config as config_mod

    return config_mod.Config(public_dir=str(public_dir))


@pytest.fixture()
def flask_app(theme_config):
    from themeicons import create_app

    app = create_app(theme_config)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
