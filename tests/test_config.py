import os

import pytest

from env_injector.config import ConfigError, LoaderConfig, load_config


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "loader.yaml"
    path.write_text(
        "env_file: settings.env\n"
        "separator: ':'\n"
        "max_rounds: 5\n"
        "abort_on_circular: true\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config == LoaderConfig(env_file="settings.env", separator=":", max_rounds=5, abort_on_circular=True)


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "loader.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == LoaderConfig()


def test_pathsep_keyword_selects_platform_separator(tmp_path):
    path = tmp_path / "loader.yaml"
    path.write_text("separator: pathsep\n", encoding="utf-8")

    assert load_config(path).separator == os.pathsep


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "content",
    ["max_rounds: 0\n", "max_rounds: lots\n", "abort_on_circular: maybe\n", "- a\n- b\n", "key: [unclosed\n"],
)
def test_invalid_config_values_raise(tmp_path, content):
    path = tmp_path / "loader.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)
