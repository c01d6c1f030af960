"""Unit tests for configuration loading."""

import json

import pytest
import requests

from autobump.config import (
    Config,
    create_sample_config,
    find_config_file,
    get_config,
    load_json_config,
    read_lines,
    write_lines,
)


def test_config_defaults(clean_env):
    config = Config()

    assert config.gitlab_host == "https://gitlab.com"
    assert config.gitlab_token is None
    assert config.changelog_file == "CHANGELOG.md"
    assert config.branch_prefix == "chore/bump-"


def test_gitlab_host_gets_a_scheme(clean_env):
    assert Config(gitlab_host="gitlab.example.com").gitlab_host == "https://gitlab.example.com"
    assert Config(gitlab_host="http://localhost:8080").gitlab_host == "http://localhost:8080"


def test_get_config_reads_json_and_env_overrides(clean_env, monkeypatch):
    path = clean_env / "settings.json"
    path.write_text(json.dumps({
        "gitlab_host": "gitlab.example.com",
        "project": "group/from-file",
        "changelog_file": "docs/CHANGES.md",
        "unknown_key": True,
    }))
    monkeypatch.setenv("AUTOBUMP_PROJECT", "group/from-env")

    config = get_config(str(path))

    assert config.gitlab_host == "https://gitlab.example.com"
    assert config.project == "group/from-env"
    assert config.changelog_file == "docs/CHANGES.md"
    assert config.config_file == str(path)


def test_get_config_finds_file_in_working_directory(clean_env):
    (clean_env / "autobump.json").write_text(json.dumps({"branch_prefix": "release/"}))

    assert find_config_file() == "autobump.json"
    assert get_config().branch_prefix == "release/"


def test_get_config_survives_broken_file(clean_env):
    path = clean_env / "broken.json"
    path.write_text("{not json")

    config = get_config(str(path))

    assert config.project is None
    assert config.config_file is None


def test_load_json_config_errors(clean_env):
    with pytest.raises(ValueError):
        load_json_config(str(clean_env / "missing.json"))


class FakeResponse:
    def __init__(self, payload, status_error=None):
        self.payload = payload
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def json(self):
        return self.payload


def test_load_json_config_from_url(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse({"project": "group/remote"})

    monkeypatch.setattr("autobump.config.settings.requests.get", fake_get)

    assert load_json_config("https://example.com/autobump.json") == {"project": "group/remote"}
    assert calls == [("https://example.com/autobump.json", 30)]


def test_load_json_config_from_url_http_error(monkeypatch):
    def fake_get(url, timeout):
        return FakeResponse(None, requests.HTTPError("404 Not Found"))

    monkeypatch.setattr("autobump.config.settings.requests.get", fake_get)

    with pytest.raises(ValueError, match="404"):
        load_json_config("https://example.com/missing.json")


def test_create_sample_config(clean_env):
    create_sample_config("sample.json")

    data = json.loads((clean_env / "sample.json").read_text())
    assert data["changelog_file"] == "CHANGELOG.md"
    assert "gitlab_token" in data


def test_read_and_write_lines(tmp_path):
    path = tmp_path / "CHANGELOG.md"
    write_lines(str(path), ["# Changelog", "", "## [Unreleased]"])

    assert path.read_text() == "# Changelog\n\n## [Unreleased]\n"
    assert read_lines(str(path)) == ["# Changelog", "", "## [Unreleased]"]
