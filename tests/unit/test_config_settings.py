import stat

import pytest
import yaml

from digit.config import settings
from digit.config.settings import AuthConfig, CLIConfig
from digit.core.services.exceptions import ConfigError


def make_auth(**overrides):
    base = dict(
        server_url="https://digit.example.org",
        realm="ACME",
        client_id="auth-server",
        client_secret="changeme",
        username="admin",
        password="admin",
    )
    base.update(overrides)
    return AuthConfig(**base)


def test_default_path_honours_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DIGIT_CONFIG", str(tmp_path / "custom.yaml"))
    assert settings.default_config_path() == tmp_path / "custom.yaml"


def test_default_path_is_under_home(monkeypatch, tmp_path):
    monkeypatch.delenv("DIGIT_CONFIG", raising=False)
    monkeypatch.setattr(settings.Path, "home", classmethod(lambda cls: tmp_path))
    assert settings.default_config_path() == tmp_path / ".digit" / "config.yaml"


def test_missing_file_loads_empty_config(isolated_home):
    cfg = CLIConfig.load()
    assert cfg.server == ""
    assert cfg.jwt_token == ""
    assert cfg.auth_config is None
    assert cfg.path == isolated_home / "config.yaml"


def test_save_then_load_keeps_every_field(isolated_home):
    cfg = CLIConfig(server="https://digit.example.org", jwt_token="tok", auth_config=make_auth())
    cfg.save()

    loaded = CLIConfig.load()

    assert loaded.server == "https://digit.example.org"
    assert loaded.jwt_token == "tok"
    assert loaded.auth_config == make_auth()
    assert loaded.realm == "ACME"


def test_save_uses_owner_only_permissions(isolated_home):
    CLIConfig(server="https://digit.example.org").save()

    file_mode = stat.S_IMODE((isolated_home / "config.yaml").stat().st_mode)
    dir_mode = stat.S_IMODE(isolated_home.stat().st_mode)
    assert file_mode == 0o600
    assert dir_mode == 0o700


def test_existing_parent_directory_keeps_its_mode(monkeypatch, tmp_path):
    shared = tmp_path / "shared"
    shared.mkdir()
    shared.chmod(0o755)
    monkeypatch.setenv("DIGIT_CONFIG", str(shared / "digit.yaml"))

    CLIConfig(server="https://digit.example.org", jwt_token="tok").save()

    assert stat.S_IMODE(shared.stat().st_mode) == 0o755
    assert stat.S_IMODE((shared / "digit.yaml").stat().st_mode) == 0o600


def test_existing_loose_file_is_tightened(isolated_home):
    isolated_home.mkdir(parents=True)
    path = isolated_home / "config.yaml"
    path.write_text("server: old\n")
    path.chmod(0o644)

    CLIConfig(server="new").save()

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert CLIConfig.load().server == "new"


def test_saved_yaml_uses_snake_case_keys(isolated_home):
    CLIConfig(server="s", jwt_token="t", auth_config=make_auth()).save()
    data = yaml.safe_load((isolated_home / "config.yaml").read_text())
    assert list(data) == ["server", "jwt_token", "auth_config"]
    assert data["auth_config"]["client_secret"] == "changeme"


def test_malformed_yaml_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server: [unterminated\n")
    with pytest.raises(ConfigError, match="failed to read"):
        CLIConfig.load(path)


def test_non_mapping_yaml_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        CLIConfig.load(path)


def test_realm_is_empty_without_credentials():
    assert CLIConfig(server="s").realm == ""
