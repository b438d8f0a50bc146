#!/usr/bin/env python3

import argparse
import logging
import logging.config
import os

from flask import Flask
from waitress import serve  # type: ignore
from werkzeug.exceptions import HTTPException

from blueprints.main import main_bp
from config import Config
from utils.asset_utils import AssetManifest, IconUrlResolver
from utils.http_utils import json_error, wants_json
from utils.icon_utils import IconRenderer, register_icon_function
from utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def create_app(config=None, icon_url_filter=None):
    """Build the Flask app and expose ``icon(...)`` to its templates.

    ``icon_url_filter`` receives the resolved sprite URL and may return a
    different one (e.g. a CDN URL).
    """
    config = config or Config()
    app = Flask(
        __name__,
        template_folder=os.path.join(Config.BASE_DIR, "templates"),
        static_folder=config.public_dir,
        static_url_path=config.public_url,
    )

    manifest = AssetManifest(
        config.manifest_file,
        base_url=config.public_url,
        strict=config.strict_manifest,
    )
    renderer = IconRenderer(IconUrlResolver(manifest, url_filter=icon_url_filter))
    register_icon_function(app, renderer)

    # Store dependencies
    app.config["THEME_CONFIG"] = config
    app.config["ASSET_MANIFEST"] = manifest
    app.config["ICON_RENDERER"] = renderer

    app.register_blueprint(main_bp)

    @app.errorhandler(404)
    def _handle_not_found(err):
        if wants_json():
            return json_error("Not found", status=404)
        return ("Not found", 404)

    @app.errorhandler(405)
    def _handle_method_not_allowed(err):
        if wants_json():
            return json_error("Method not allowed", status=405)
        return ("Method not allowed", 405)

    @app.errorhandler(Exception)
    def _handle_unexpected_error(err: Exception):
        if isinstance(err, HTTPException):
            return err
        logger.exception("Unhandled exception: %s", err)
        if wants_json():
            return json_error("An internal error occurred", status=500)
        return ("Internal Server Error", 500)

    @app.after_request
    def _set_security_headers(response):
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response

    return app


def main(argv=None):
    logging.config.fileConfig(
        os.path.join(os.path.dirname(__file__), "config", "logging.conf"),
        disable_existing_loggers=False,
    )

    parser = argparse.ArgumentParser(description="Theme icon preview server")
    parser.add_argument("--dev", action="store_true", help="Run in development mode")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument("--public-dir", type=str, default=None, help="Directory holding build/ and mix-manifest.json")
    args = parser.parse_args(argv)

    config = Config(
        public_dir=args.public_dir,
        dev_mode=True if args.dev else None,
        port=args.port,
    )
    setup_logging(config.log_format, logging.DEBUG if config.dev_mode else None)

    mode = "DEVELOPMENT" if config.dev_mode else "PRODUCTION"
    logger.info(f"Starting theme icons in {mode} mode on port {config.port}")

    app = create_app(config)
    serve(app, host="0.0.0.0", port=config.port, threads=4)


if __name__ == "__main__":
    main()
