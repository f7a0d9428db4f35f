"""Configuration loading tests."""

import pytest
import yaml

from spacenexus.config import (
    Config,
    ConfigModel,
    default_sources,
    load_config,
    load_sources,
    save_config,
    save_sources,
)
from spacenexus.models import AuthorType


def test_defaults_match_fetch_contract():
    fetch = ConfigModel().fetch
    assert fetch.timeout_seconds == 15.0
    assert fetch.max_items_per_source == 20
    assert fetch.excerpt_max_length == 300
    assert fetch.max_concurrent == 1


def test_config_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    save_config(ConfigModel(logging={"level": "debug"}), path)

    loaded = load_config(path)
    assert loaded.logging.level == "DEBUG"
    assert loaded.postgres.password_env == "SPACENEXUS_DB_PASSWORD"


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_config_raises_value_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("fetch:\n  timeout_seconds: -1\n")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_empty_config_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).freshness.max_stale_minutes == 360


def test_password_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    save_config(ConfigModel(), path)
    monkeypatch.setenv("SPACENEXUS_DB_PASSWORD", "s3cret")

    assert Config(path).get_db_config()["password"] == "s3cret"


def test_sources_written_as_plain_yaml(tmp_path):
    path = tmp_path / "sources.yaml"
    save_sources(default_sources(), path)

    raw = yaml.safe_load(path.read_text())
    assert raw["sources"][0]["author_type"] == "journalist"

    loaded = load_sources(path)
    assert [s.slug for s in loaded] == [s.slug for s in default_sources()]


def test_invalid_and_duplicate_sources_are_skipped(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "sources": [
                    {"slug": "ok", "name": "OK", "url": "https://ok.test", "author_type": "lawyer"},
                    {"slug": "bad", "name": "Bad", "url": "https://bad.test", "author_type": "astronaut"},
                    {"slug": "ok", "name": "Again", "url": "https://ok.test", "author_type": "lawyer"},
                ]
            }
        )
    )

    sources = load_sources(path)
    assert len(sources) == 1
    assert sources[0].author_type == AuthorType.LAWYER
    assert sources[0].feed_url is None


def test_default_registry_is_immutable_and_unique():
    sources = default_sources()
    assert isinstance(sources, tuple)
    assert len({s.slug for s in sources}) == len(sources)
    assert all(s.feed_url for s in sources)
