import json
import logging

from htmlxpath.utils import config as config_module
from htmlxpath.utils.config import Config, get_config, set_config


def test_defaults_when_file_missing(tmp_path):
    config = Config(str(tmp_path / "missing.json"))
    assert config.get("parser.backend") == "html5lib"
    assert config.get("network.retries") == 3
    assert config.get("output.excerpt_length") == 78
    assert not (tmp_path / "missing.json").exists()


def test_file_values_are_layered_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"network": {"timeout": 5}, "extra": True}), encoding="utf-8")
    config = Config(str(path))
    assert config.get("network.timeout") == 5
    assert config.get("network.retries") == 3
    assert config.get("extra") is True


def test_invalid_json_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        config = Config(str(path))
    assert config.get("parser.backend") == "html5lib"
    assert "Error loading configuration" in caplog.text


def test_non_object_json_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert Config(str(path)).get("network.timeout") == 30


def test_dotted_get_set_remove(tmp_path):
    config = Config(str(tmp_path / "c.json"))
    assert config.get("a.b.c", "fallback") == "fallback"
    config.set("a.b.c", 1)
    assert config.get("a.b.c") == 1
    assert config.get("a.b") == {"c": 1}
    assert config.remove("a.b.c") is True
    assert config.remove("a.b.c") is False
    assert config.remove("nope.x") is False


def test_get_all_is_a_copy(tmp_path):
    config = Config(str(tmp_path / "c.json"))
    snapshot = config.get_all()
    snapshot["parser"]["backend"] = "changed"
    assert config.get("parser.backend") == "html5lib"


def test_save_and_reload(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = Config(str(path))
    config.set("parser.backend", "lxml")
    config.save()
    assert Config(str(path)).get("parser.backend") == "lxml"


def test_environment_variable_selects_path(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    monkeypatch.setenv(config_module.CONFIG_ENV_VAR, str(path))
    assert config_module.default_config_path() == str(path)
    assert Config().config_path == str(path)


def test_global_config_is_cached_until_replaced(tmp_path):
    first = get_config()
    assert get_config() is first
    replacement = Config(str(tmp_path / "other.json"))
    set_config(replacement)
    assert get_config() is replacement
    set_config(None)
    assert get_config() is not replacement


def test_unknown_parser_backend_falls_back_to_default(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"parser": {"backend": "bogus"}, "network": {"timeout": 7}}),
                    encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        config = Config(str(path))
    assert config.get("parser.backend") == "html5lib"
    assert config.get("network.timeout") == 7
    assert "Unknown parser.backend 'bogus'" in caplog.text


def test_configured_lxml_backend_is_kept(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"parser": {"backend": "lxml"}}), encoding="utf-8")
    assert Config(str(path)).get("parser.backend") == "lxml"
