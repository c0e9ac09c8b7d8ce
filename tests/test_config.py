from pathlib import Path

import pytest

from squirrel import ConfigurationError
from squirrel.config import SquirrelConfig, load_config


def test_load_config_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(f"cache_dir: {tmp_path}", encoding="utf-8")

    cfg = load_config(path)

    assert isinstance(cfg, SquirrelConfig)
    assert cfg.cache_dir == tmp_path
    assert cfg.ttl_sec == 0
    assert cfg.codec == "pickle"


def test_env_overrides(monkeypatch, tmp_path):
    source = tmp_path / "config.yml"
    source.write_text("cache_dir: /var/cache/app\nttl_sec: 60\n", encoding="utf-8")

    monkeypatch.setenv("SQUIRREL_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("SQUIRREL_TTL_SEC", "-1")
    monkeypatch.setenv("SQUIRREL_CODEC", "json")

    cfg = load_config(source)

    assert cfg.cache_dir == tmp_path
    assert cfg.ttl_sec == -1
    assert cfg.codec == "json"


def test_home_is_expanded(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("cache_dir: ~/squirrel", encoding="utf-8")

    assert load_config(path).cache_dir == Path.home() / "squirrel"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


@pytest.mark.parametrize(
    "body",
    [
        "ttl_sec: 60",
        "cache_dir: /tmp\nttl_sec: -2",
        "cache_dir: /tmp\ncodec: yaml",
        "cache_dir: /tmp\nunknown: 1",
    ],
)
def test_invalid_config_rejected(tmp_path, body):
    path = tmp_path / "config.yml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigurationError, match="squirrel config validation failed"):
        load_config(path)


def test_non_integer_env_ttl(monkeypatch, tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("cache_dir: /tmp", encoding="utf-8")
    monkeypatch.setenv("SQUIRREL_TTL_SEC", "soon")

    with pytest.raises(ConfigurationError, match="SQUIRREL_TTL_SEC must be an integer"):
        load_config(path)
