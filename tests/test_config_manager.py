import json
from pathlib import Path

import yaml

from contactbook.config import ConfigManager


def test_defaults_written_when_missing(tmp_path: Path):
    path = tmp_path / "config.yaml"
    cfg = ConfigManager(str(path))
    cfg.load()

    assert cfg.is_loaded
    assert cfg.get("storage.path") == "contacts.json"
    assert cfg.get("ui.width") == 600
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["ui"]["height"] == 400


def test_file_values_merge_over_defaults(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("storage:\n  path: data/people.json\nui:\n  width: 800\n", encoding="utf-8")

    cfg = ConfigManager(str(path))
    cfg.load()

    assert cfg.get("storage.path") == "data/people.json"
    assert cfg.get("ui.width") == 800
    assert cfg.get("ui.height") == 400
    assert cfg.get("missing.key", "fallback") == "fallback"


def test_json_config(tmp_path: Path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logging": {"level": "WARNING"}}), encoding="utf-8")

    cfg = ConfigManager(str(path))
    cfg.load()

    assert cfg.get("logging.level") == "WARNING"


def test_broken_config_uses_defaults(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("storage: [unclosed", encoding="utf-8")

    cfg = ConfigManager(str(path))
    cfg.load()

    assert cfg.get("storage.path") == "contacts.json"


def test_env_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_DATA_FILE", str(tmp_path / "x.json"))
    monkeypatch.setenv("CONTACTBOOK_DEBUG", "yes")
    monkeypatch.setenv("CONTACTBOOK_LOG_LEVEL", "debug")

    cfg = ConfigManager(str(tmp_path / "config.yaml"), create_if_missing=False)
    cfg.load()

    assert cfg.get("storage.path") == str(tmp_path / "x.json")
    assert cfg.get("app.debug") is True
    assert cfg.get("logging.level") == "DEBUG"
    assert not (tmp_path / "config.yaml").exists()


def test_set_notifies_watchers(tmp_path: Path):
    cfg = ConfigManager(str(tmp_path / "config.yaml"), create_if_missing=False)
    seen = []
    cfg.watch(lambda k, v: seen.append((k, v)))

    cfg.set("ui.theme.name", "dark")

    assert cfg.get("ui.theme.name") == "dark"
    assert seen == [("ui.theme.name", "dark")]
    assert cfg.all["ui"]["width"] == 600
