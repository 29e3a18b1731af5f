"""Tests for config loading and credential checks."""

import json

import pytest

from index_inspector.config.loader import Config, load_config
from index_inspector.errors import ConfigError
from index_inspector.models.page_state import PageClassification


def test_defaults_match_search_console_flow():
    config = Config()
    assert config.browser.engine == "firefox"
    assert config.browser.headless is True
    assert config.timeouts.default_timeout_ms == 240000
    assert config.timeouts.second_factor_probe_ms == 3000
    assert config.extraction_errors == "skip"
    assert [r.classification for r in config.failure_policy] == [
        PageClassification.QUOTA_EXCEEDED,
        PageClassification.TRANSIENT_ERROR,
        PageClassification.ITEM_NOT_APPLICABLE,
    ]
    assert config.extraction.detail_groups == [
        "Sitemaps", "Referring page", "User-canonical", "Google-canonical",
    ]


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "credentials:\n"
        "  identity: me@example.com\n"
        "  site: sc-domain:example.com\n"
        "browser:\n"
        "  engine: chromium\n"
        "  headless: false\n"
        "failure_policy:\n"
        "  - name: busy\n"
        "    selector: text=Try again later\n"
        "    classification: TRANSIENT_ERROR\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.credentials.site == "sc-domain:example.com"
    assert config.browser.engine == "chromium"
    assert config.browser.headless is False
    assert len(config.failure_policy) == 1
    assert config.failure_policy[0].classification is PageClassification.TRANSIENT_ERROR


def test_load_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"input_path": "list.txt", "extraction_errors": "abort"}), encoding="utf-8")
    config = load_config(path)
    assert config.input_path == "list.txt"
    assert config.extraction_errors == "abort"


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("classification", ["READY", "SECOND_FACTOR_REQUIRED", "BOGUS"])
def test_policy_rejects_non_loop_classifications(tmp_path, classification):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "failure_policy": [{"name": "x", "selector": "text=x", "classification": classification}],
    }), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_secret_from_environment(monkeypatch):
    monkeypatch.setenv("MY_GSC_SECRET", "s3cret")
    config = Config.from_dict({
        "credentials": {"identity": "me@example.com", "secret_env": "MY_GSC_SECRET", "site": "https://example.com/"},
    })
    assert config.credentials.resolve_secret() == "s3cret"
    config.credentials.check()


def test_secret_not_in_repr():
    config = Config.from_dict({"credentials": {"secret": "hunter2"}})
    assert "hunter2" not in repr(config.credentials)


def test_missing_credentials_are_reported(monkeypatch):
    monkeypatch.delenv("GSC_PASSWORD", raising=False)
    with pytest.raises(ConfigError) as excinfo:
        Config().credentials.check()
    message = str(excinfo.value)
    assert "identity" in message
    assert "GSC_PASSWORD" in message
    assert "site" in message
