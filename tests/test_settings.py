"""
tests/test_settings.py
Settings file validation and environment overrides.
"""

import pytest

from core.settings import (
    ConfigError, Settings, config_path, load_settings, validate_config,
)


def _write(name, text):
    with open(name, "w", encoding="utf-8") as f:
        f.write(text)


class TestConfigPath:

    def test_none_without_file(self, tmp_workdir):
        assert config_path({}) is None

    def test_default_file_in_workdir(self, tmp_workdir):
        _write(".hello-env.yaml", "verbose: true\n")
        assert config_path({}) == ".hello-env.yaml"

    def test_env_var_wins(self, tmp_workdir):
        _write(".hello-env.yaml", "verbose: true\n")
        assert config_path({"HELLO_ENV_CONFIG": "other.yaml"}) == "other.yaml"


class TestValidateConfig:

    def test_valid(self, tmp_workdir):
        _write("c.yaml", "files: [.env, .env.local]\noverwrite: true\n"
                         "list: false\nlog_level: debug\nlog_format: json\n")
        data, errors = validate_config("c.yaml")
        assert errors == []
        assert data["files"] == [".env", ".env.local"]

    def test_empty_file_is_valid(self, tmp_workdir):
        _write("c.yaml", "")
        assert validate_config("c.yaml") == ({}, [])

    def test_missing_file(self, tmp_workdir):
        data, errors = validate_config("nope.yaml")
        assert data == {}
        assert errors == ["Config file not found: nope.yaml"]

    def test_yaml_error(self, tmp_workdir):
        _write("c.yaml", "files: [unclosed\n")
        _, errors = validate_config("c.yaml")
        assert len(errors) == 1
        assert errors[0].startswith("YAML parse error")

    def test_not_a_mapping(self, tmp_workdir):
        _write("c.yaml", "- a\n- b\n")
        assert "must be a mapping" in validate_config("c.yaml")[1][0]

    def test_collects_every_problem(self, tmp_workdir):
        _write("c.yaml", "files: .env\nverbose: 1\ncolour: red\n"
                         "log_level: LOUD\nlog_format: xml\n")
        data, errors = validate_config("c.yaml")
        assert data == {}
        assert any("unknown key 'colour'" in e for e in errors)
        assert any("'files' must be a list" in e for e in errors)
        assert any("'verbose' must be true or false" in e for e in errors)
        assert any("invalid log_level 'LOUD'" in e for e in errors)
        assert any("invalid log_format 'xml'" in e for e in errors)


class TestLoadSettings:

    def test_defaults(self, tmp_workdir):
        assert load_settings({}) == Settings()

    def test_from_file(self, tmp_workdir):
        _write(".hello-env.yaml", "files: [a.env]\nlist: true\nlog_level: info\n")
        settings = load_settings({})
        assert settings.files == ["a.env"]
        assert settings.list_names is True
        assert settings.log_level == "INFO"
        assert settings.overwrite is False

    def test_environment_overrides_file(self, tmp_workdir):
        _write(".hello-env.yaml", "log_level: INFO\n")
        settings = load_settings({"HELLO_ENV_LOG_LEVEL": "DEBUG",
                                  "HELLO_ENV_LOG_FILE": "out.log"})
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "out.log"

    def test_missing_explicit_file_raises(self, tmp_workdir):
        with pytest.raises(ConfigError) as exc:
            load_settings({"HELLO_ENV_CONFIG": "absent.yaml"})
        assert exc.value.errors == ["Config file not found: absent.yaml"]

    def test_bad_environment_value_raises(self, tmp_workdir):
        with pytest.raises(ConfigError) as exc:
            load_settings({"HELLO_ENV_LOG_FORMAT": "xml"})
        assert "environment: invalid log_format 'xml'" in exc.value.errors[0]
