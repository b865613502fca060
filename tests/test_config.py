import pytest

from core.config import AVAILABILITY_VALUES, Settings, load_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")

    assert settings == Settings()
    assert settings.pool_size == 20
    assert settings.catalog == "_data/sites.json"
    assert settings.availability_values == AVAILABILITY_VALUES


def test_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("pool_size: 5\ntimeout: 2.5\nunknown_key: true\nentry_keys: [name, url]\n", encoding="utf-8")

    settings = load_settings(path)

    assert settings.pool_size == 5
    assert settings.timeout == 2.5
    assert settings.entry_keys == ["name", "url"]
    assert settings.queue_size == 100


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == Settings()


def test_non_mapping_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(path)
