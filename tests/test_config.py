"""Tests for packager settings loading."""

import json

import pytest

from yarn_packager.config import (
    CONFIG_PATH_ENV_VAR,
    ConfigError,
    IgnoredError,
    PackagerSettings,
    default_command,
    load_settings,
)


def test_defaults_without_config(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    settings = load_settings()

    assert settings == PackagerSettings()
    assert settings.command == default_command()
    assert settings.use_lockfile is True
    assert settings.ignored_errors == ()


def test_load_json(tmp_path):
    path = tmp_path / "packager.json"
    path.write_text(
        json.dumps(
            {
                "command": "yarnpkg",
                "useLockfile": False,
                "ignoredErrors": ["peer dep missing"],
                "scripts": ["build"],
                "depth": 3,
            }
        ),
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.command == "yarnpkg"
    assert settings.use_lockfile is False
    assert settings.ignored_errors == (IgnoredError("peer dep missing"),)
    assert settings.scripts == ("build",)
    assert settings.depth == 3


def test_load_yaml(tmp_path):
    path = tmp_path / "packager.yml"
    path.write_text("command: yarn\nscripts:\n  - build\n  - test\n", encoding="utf-8")

    settings = load_settings(path)

    assert settings.scripts == ("build", "test")


def test_empty_yaml_is_defaults(tmp_path):
    path = tmp_path / "packager.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == PackagerSettings()


def test_env_var_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text('{"depth": 1}', encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(path))

    assert load_settings().depth == 1


def test_default_file_in_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    (tmp_path / "yarn-packager.json").write_text('{"scripts": ["bundle"]}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_settings().scripts == ("bundle",)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_settings(path)


def test_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ConfigError, match="must be an object"):
        load_settings(path)


@pytest.mark.parametrize(
    "data, field",
    [
        ({"command": ""}, "command"),
        ({"useLockfile": "yes"}, "useLockfile"),
        ({"ignoredErrors": "x"}, "ignoredErrors"),
        ({"ignoredErrors": [""]}, "ignoredErrors"),
        ({"scripts": [1]}, "scripts"),
        ({"depth": -1}, "depth"),
        ({"depth": True}, "depth"),
    ],
)
def test_invalid_fields(data, field):
    with pytest.raises(ConfigError, match=field):
        PackagerSettings.from_dict(data)


def test_ignored_error_prefix():
    ignored = IgnoredError("peer dep missing")
    assert ignored.matches("npm ERR! peer dep missing: react@^18")
    assert not ignored.matches("error peer dep missing")
