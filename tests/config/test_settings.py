"""Settings resolution: defaults, YAML file, environment overrides."""

import pytest

from pizzeria_config import DEFAULT_DATABASE_URL, PizzeriaSettings, load_settings


class TestDefaults:
    def test_empty_environment_gives_defaults(self):
        settings = load_settings(environ={})
        assert settings == PizzeriaSettings()
        assert settings.database_url == DEFAULT_DATABASE_URL == "sqlite:///pizzeria.db"
        assert settings.max_attempts == 3
        assert settings.report_window_days is None
        assert settings.top_ingredients_limit == 5


class TestYamlFile:
    def test_file_values_applied(self, tmp_path):
        path = tmp_path / "pizzeria.yaml"
        path.write_text(
            "database_url: sqlite:///other.db\n"
            "max_attempts: 5\n"
            "report_window_days: 30\n"
            "echo_sql: yes\n"
        )
        settings = load_settings(path, environ={})
        assert settings.database_url == "sqlite:///other.db"
        assert settings.max_attempts == 5
        assert settings.report_window_days == 30
        assert settings.echo_sql is True

    def test_config_path_from_environment(self, tmp_path):
        path = tmp_path / "pizzeria.yaml"
        path.write_text("top_ingredients_limit: 3\n")
        settings = load_settings(environ={"PIZZERIA_CONFIG": str(path)})
        assert settings.top_ingredients_limit == 3

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "pizzeria.yaml"
        path.write_text("max_retries: 5\n")
        with pytest.raises(KeyError, match="max_retries"):
            load_settings(path, environ={})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml", environ={})


class TestEnvironment:
    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "pizzeria.yaml"
        path.write_text("max_attempts: 5\nlog_level: info\n")
        settings = load_settings(
            path,
            environ={
                "DATABASE_URL": "postgresql://pizza@localhost/pizzeria",
                "PIZZERIA_MAX_ATTEMPTS": "7",
                "PIZZERIA_LOG_LEVEL": "debug",
                "PIZZERIA_RETRY_BACKOFF_SECONDS": "0.5",
                "PIZZERIA_ECHO_SQL": "false",
            },
        )
        assert settings.database_url == "postgresql://pizza@localhost/pizzeria"
        assert settings.max_attempts == 7
        assert settings.log_level == "DEBUG"
        assert settings.retry_backoff_seconds == 0.5
        assert settings.echo_sql is False

    def test_report_window_none(self):
        settings = load_settings(environ={"PIZZERIA_REPORT_WINDOW_DAYS": "none"})
        assert settings.report_window_days is None

    @pytest.mark.parametrize(
        "var, value",
        [
            ("PIZZERIA_MAX_ATTEMPTS", "three"),
            ("PIZZERIA_MAX_ATTEMPTS", "0"),
            ("PIZZERIA_ECHO_SQL", "maybe"),
            ("PIZZERIA_TOP_INGREDIENTS_LIMIT", "-1"),
        ],
    )
    def test_bad_values_rejected(self, var, value):
        with pytest.raises(ValueError):
            load_settings(environ={var: value})
