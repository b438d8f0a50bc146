# pyright: reportMissingImports=false
import os


def test_defaults(tmp_path):
    import config as config_mod

    cfg = config_mod.Config()
    assert cfg.public_dir == config_mod.Config.public_dir
    assert cfg.public_url == "/static"
    assert cfg.manifest_file == os.path.join(cfg.public_dir, "mix-manifest.json")
    assert cfg.strict_manifest is False
    assert cfg.dev_mode is False
    assert cfg.port == 80
    assert cfg.log_format == "text"


def test_env_overrides(monkeypatch, tmp_path):
    import config as config_mod

    monkeypatch.setenv("THEMEICONS_PUBLIC_DIR", str(tmp_path))
    monkeypatch.setenv("THEMEICONS_PUBLIC_URL", "/assets")
    monkeypatch.setenv("THEMEICONS_STRICT_MANIFEST", "yes")
    monkeypatch.setenv("THEMEICONS_ENV", "development")
    monkeypatch.setenv("THEMEICONS_LOG_FORMAT", "JSON")

    cfg = config_mod.Config()
    assert cfg.public_dir == str(tmp_path)
    assert cfg.public_url == "/assets"
    assert cfg.manifest_file == os.path.join(str(tmp_path), "mix-manifest.json")
    assert cfg.strict_manifest is True
    assert cfg.dev_mode is True
    assert cfg.port == 8080
    assert cfg.log_format == "json"


def test_explicit_arguments_win_over_env(monkeypatch, tmp_path):
    import config as config_mod

    monkeypatch.setenv("THEMEICONS_PUBLIC_URL", "/assets")
    monkeypatch.setenv("THEMEICONS_PORT", "9000")
    monkeypatch.setenv("THEMEICONS_MANIFEST_FILE", "/env/manifest.json")

    cfg = config_mod.Config(public_url="/cli", port=5000, manifest_file="/cli/manifest.json")
    assert cfg.public_url == "/cli"
    assert cfg.port == 5000
    assert cfg.manifest_file == "/cli/manifest.json"


def test_port_from_env_and_invalid_fallback(monkeypatch):
    import config as config_mod

    monkeypatch.setenv("PORT", "5050")
    assert config_mod.Config().port == 5050

    monkeypatch.setenv("THEMEICONS_PORT", "not-a-port")
    assert config_mod.Config().port == 80


def test_unknown_log_format_falls_back(monkeypatch):
    import config as config_mod

    monkeypatch.setenv("THEMEICONS_LOG_FORMAT", "xml")
    assert config_mod.Config().log_format == "text"


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    import config as config_mod

    (tmp_path / ".env").write_text("THEMEICONS_PUBLIC_URL=/from-dotenv\n")
    monkeypatch.setenv("PROJECT_DIR", str(tmp_path))
    try:
        cfg = config_mod.Config()
        assert cfg.get_env_file_path() == os.path.join(str(tmp_path), ".env")
        assert cfg.public_url == "/from-dotenv"
    finally:
        os.environ.pop("THEMEICONS_PUBLIC_URL", None)
