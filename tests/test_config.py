import logging
from pathlib import Path

from fincore import config


def test_categories_file_unset(monkeypatch):
    monkeypatch.delenv("FINCORE_CATEGORIES_FILE", raising=False)

    assert config.get_categories_file() is None


def test_categories_file_from_env(monkeypatch, tmp_path):
    path = tmp_path / "cats.json"
    monkeypatch.setenv("FINCORE_CATEGORIES_FILE", str(path))

    assert config.get_categories_file() == Path(path)


def test_seed_path_points_into_data_dir():
    assert config.SEED_PATH.name == "seed.json"


def test_configure_logging_accepts_lowercase_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.configure_logging("debug")

    assert calls == [{"level": "DEBUG", "format": config.LOG_FORMAT}]
