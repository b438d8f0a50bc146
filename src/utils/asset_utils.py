"""Static asset URL helpers.

Assets are versioned through a Laravel Mix style manifest
(``mix-manifest.json``) that maps an asset path to the same path with a
cache-busting query string::

    {"/build/icons/icons.svg": "/build/icons/icons.svg?id=5f1c2a"}
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

ICON_SPRITE_PATH = "build/icons/icons.svg"


class AssetManifestError(Exception):
    """Raised when a strict manifest cannot be loaded or is malformed."""


class AssetManifest:
    """Resolves asset paths to versioned URLs using a Mix manifest.

    With ``strict=False`` (the default) a missing or unreadable manifest is
    logged and every asset resolves to its unversioned URL. With
    ``strict=True`` an :class:`AssetManifestError` is raised instead.
    """

    def __init__(self, manifest_file: str, base_url: str = "/static", *, strict: bool = False):
        self.manifest_file = manifest_file
        self.base_url = base_url.rstrip("/")
        self.strict = strict
        self._entries: dict[str, str] | None = None
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        try:
            with open(self.manifest_file, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            message = f"Asset manifest not found: {self.manifest_file}"
            if self.strict:
                raise AssetManifestError(message)
            logger.warning(message)
            return {}
        except (OSError, ValueError) as ex:
            message = f"Unable to read asset manifest {self.manifest_file}: {ex}"
            if self.strict:
                raise AssetManifestError(message) from ex
            logger.warning(message)
            return {}

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            message = f"Asset manifest must map strings to strings: {self.manifest_file}"
            if self.strict:
                raise AssetManifestError(message)
            logger.warning(message)
            return {}

        logger.debug(f"Loaded {len(data)} entries from asset manifest {self.manifest_file}")
        return data

    @property
    def entries(self) -> dict[str, str]:
        with self._lock:
            if self._entries is None:
                self._entries = self._load()
            return self._entries

    def reload(self) -> None:
        """Drop the loaded manifest so the next lookup reads it again."""
        with self._lock:
            self._entries = None

    def resolve(self, asset_path: str) -> str:
        """Return the versioned URL for ``asset_path``."""
        key = "/" + asset_path.lstrip("/")
        versioned = self.entries.get(key)
        if versioned is None:
            logger.warning(f"Asset not in manifest, using unversioned URL: {key}")
            versioned = key
        return f"{self.base_url}{versioned}"

    __call__ = resolve


def _identity(url: str) -> str:
    return url


class IconUrlResolver:
    """Builds the URL of the icon sprite.

    ``asset_resolver`` turns a relative asset path into a (versioned) URL.
    ``url_filter`` may replace the resolved URL, e.g. to serve the sprite
    from a CDN; it receives the URL and must return a string.
    """

    def __init__(
        self,
        asset_resolver: Callable[[str], str],
        url_filter: Callable[[str], str] | None = None,
    ) -> None:
        self.asset_resolver = asset_resolver
        self.url_filter = url_filter or _identity

    def get_icon_url(self) -> str:
        icon_url = self.asset_resolver(ICON_SPRITE_PATH)
        return self.url_filter(icon_url)
