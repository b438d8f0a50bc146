import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes")


class Config:
    # Base path for the source directory
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

    # Directory served as /static; holds build/ output and the Mix manifest
    public_dir = os.path.join(BASE_DIR, "static")

    # URL prefix the public directory is served under
    public_url = "/static"

    def __init__(
        self,
        public_dir=None,
        public_url=None,
        manifest_file=None,
        strict_manifest=None,
        dev_mode=None,
        port=None,
        log_format=None,
    ):
        """Resolve settings.

        Precedence:
        1. Explicit constructor arguments (e.g., set by CLI)
        2. Environment variables (THEMEICONS_*, PORT), including a project .env
        3. Defaults
        """
        load_dotenv(dotenv_path=self.get_env_file_path(), override=False)

        self.dev_mode = dev_mode if dev_mode is not None else self._env_dev_mode()
        self.public_dir = public_dir or os.getenv("THEMEICONS_PUBLIC_DIR") or type(self).public_dir
        self.public_url = public_url or os.getenv("THEMEICONS_PUBLIC_URL") or type(self).public_url
        self.manifest_file = (
            manifest_file
            or os.getenv("THEMEICONS_MANIFEST_FILE")
            or os.path.join(self.public_dir, "mix-manifest.json")
        )
        if strict_manifest is None:
            strict_manifest = os.getenv("THEMEICONS_STRICT_MANIFEST", "").strip().lower() in _TRUTHY
        self.strict_manifest = bool(strict_manifest)
        self.port = port if port is not None else self._env_port()
        self.log_format = (log_format or os.getenv("THEMEICONS_LOG_FORMAT", "text")).strip().lower()
        if self.log_format not in ("text", "json"):
            logger.warning(f"Unknown log format '{self.log_format}', using 'text'")
            self.log_format = "text"

        logger.debug(
            f"Loaded config: public_dir={self.public_dir} public_url={self.public_url} "
            f"manifest_file={self.manifest_file} strict_manifest={self.strict_manifest} "
            f"dev_mode={self.dev_mode}"
        )

    def get_env_file_path(self):
        """Return absolute path to the .env file.

        Precedence:
        - PROJECT_DIR environment variable if provided
        - Repository root inferred as parent of src directory
        """
        project_dir = os.getenv("PROJECT_DIR")
        if not project_dir:
            project_dir = os.path.abspath(os.path.join(self.BASE_DIR, ".."))
        return os.path.join(project_dir, ".env")

    @staticmethod
    def _env_dev_mode():
        env_mode = (
            os.getenv("THEMEICONS_ENV", "").strip() or os.getenv("FLASK_ENV", "").strip()
        ).lower()
        return env_mode in ("dev", "development")

    def _env_port(self):
        default = 8080 if self.dev_mode else 80
        env_port = os.getenv("THEMEICONS_PORT") or os.getenv("PORT")
        if not env_port:
            return default
        try:
            return int(env_port)
        except ValueError:
            logger.warning(f"Invalid port '{env_port}', using {default}")
            return default
