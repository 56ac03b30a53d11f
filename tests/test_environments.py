"""Tests for cognito_login.environments."""

import os

import pytest

from cognito_login.environments import (
    available_environments,
    get_environment_source,
    load_snapshot,
    require_base_env_file,
)
from cognito_login.exceptions import MissingEnvFileError
from cognito_login.testing import temp_env_vars


class TestAvailableEnvironments:
    def test_only_development_by_default(self, tmp_path):
        (tmp_path / ".env").write_text("")
        assert [s.name for s in available_environments(tmp_path)] == ["development"]

    def test_offers_existing_files(self, tmp_path):
        (tmp_path / ".env").write_text("")
        (tmp_path / ".env.production").write_text("")

        sources = available_environments(tmp_path)

        assert [s.name for s in sources] == ["development", "production"]
        assert sources[1].path == tmp_path / ".env.production"

    def test_all_environments(self, tmp_path):
        for name in (".env", ".env.staging", ".env.production"):
            (tmp_path / name).write_text("")
        assert [s.name for s in available_environments(tmp_path)] == [
            "development",
            "staging",
            "production",
        ]


class TestRequireBaseEnvFile:
    def test_raises_when_missing(self, tmp_path):
        with pytest.raises(MissingEnvFileError, match=r"\.env file is missing"):
            require_base_env_file(tmp_path)

    def test_returns_development_source(self, tmp_path):
        (tmp_path / ".env").write_text("")
        assert require_base_env_file(tmp_path).name == "development"


class TestGetEnvironmentSource:
    def test_unknown_name_falls_back_to_base_file(self, tmp_path):
        source = get_environment_source("qa", tmp_path)
        assert source.path == tmp_path / ".env"


class TestLoadSnapshot:
    def test_reads_file_values(self, tmp_path):
        (tmp_path / ".env").write_text("A=1\nB='two words'\n")
        snapshot = load_snapshot(get_environment_source("development", tmp_path), {})
        assert dict(snapshot) == {"A": "1", "B": "two words"}

    def test_base_values_win(self, tmp_path):
        (tmp_path / ".env").write_text("A=file\nB=file\n")
        snapshot = load_snapshot(
            get_environment_source("development", tmp_path), {"A": "process"}
        )
        assert snapshot["A"] == "process"
        assert snapshot["B"] == "file"

    def test_skips_keys_without_value(self, tmp_path):
        (tmp_path / ".env").write_text("A\nB=1\n")
        snapshot = load_snapshot(get_environment_source("development", tmp_path), {})
        assert "A" not in snapshot

    def test_is_read_only(self, tmp_path):
        (tmp_path / ".env").write_text("A=1\n")
        snapshot = load_snapshot(get_environment_source("development", tmp_path), {})
        with pytest.raises(TypeError):
            snapshot["A"] = "2"  # type: ignore[index]

    def test_does_not_modify_process_environment(self, tmp_path):
        (tmp_path / ".env").write_text("COGNITO_LOGIN_TEST_ONLY=1\n")
        with temp_env_vars({"COGNITO_LOGIN_TEST_ONLY": None}):
            snapshot = load_snapshot(get_environment_source("development", tmp_path))
            assert snapshot["COGNITO_LOGIN_TEST_ONLY"] == "1"
            assert "COGNITO_LOGIN_TEST_ONLY" not in os.environ

    def test_defaults_to_process_environment(self, tmp_path):
        (tmp_path / ".env").write_text("")
        with temp_env_vars({"COGNITO_LOGIN_TEST_ONLY": "from-process"}):
            snapshot = load_snapshot(get_environment_source("development", tmp_path))
        assert snapshot["COGNITO_LOGIN_TEST_ONLY"] == "from-process"

    def test_missing_file_gives_base_only(self, tmp_path):
        snapshot = load_snapshot(get_environment_source("staging", tmp_path), {"A": "1"})
        assert dict(snapshot) == {"A": "1"}
