import os

import pytest

from env_injector.config import LoaderConfig
from env_injector.env import DeclarationFileNotFound, DeclarationReadError, load_env_file, read_declaration_lines
from env_injector.store import InMemoryStore


def write_env(tmp_path, content):
    path = tmp_path / ".env"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_env_file_applies_declarations_in_order(tmp_path):
    path = write_env(
        tmp_path,
        "# project settings\n"
        "BASE=/srv/app\n"
        "\n"
        "DATA=${BASE}/data  # where files live\n"
        "PATH:=${BASE}/bin\n"
        "PATH=:/tail\n",
    )
    store = InMemoryStore({"PATH": "/usr/bin"})

    results = load_env_file(path, store=store)

    assert store.values == {
        "BASE": "/srv/app",
        "DATA": "/srv/app/data",
        "PATH": "/srv/app/bin;/usr/bin;/tail",
    }
    assert len(results) == 4


def test_missing_file_is_a_noop_with_warning(tmp_path, caplog):
    store = InMemoryStore()

    with caplog.at_level("WARNING"):
        results = load_env_file(tmp_path / "missing.env", store=store)

    assert results == []
    assert store.values == {}
    assert "No declaration file" in caplog.text


def test_default_path_comes_from_config(tmp_path, monkeypatch):
    write_env(tmp_path, "FROM_DEFAULT=yes\n")
    monkeypatch.chdir(tmp_path)
    store = InMemoryStore()

    load_env_file(store=store, config=LoaderConfig())

    assert store.values == {"FROM_DEFAULT": "yes"}


def test_read_failure_is_distinct_from_not_found(tmp_path):
    with pytest.raises(DeclarationFileNotFound):
        read_declaration_lines(tmp_path / "nope")

    with pytest.raises(DeclarationReadError):
        read_declaration_lines(tmp_path)

    with pytest.raises(DeclarationReadError):
        load_env_file(tmp_path, store=InMemoryStore())


def test_undecodable_file_raises_read_error(tmp_path):
    path = tmp_path / ".env"
    path.write_bytes(b"KEY=\xff\xfe\n")

    with pytest.raises(DeclarationReadError):
        read_declaration_lines(path)


def test_defaults_to_process_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("ENV_INJECTOR_TEST_VALUE", raising=False)
    path = write_env(tmp_path, "ENV_INJECTOR_TEST_VALUE=from-file\n")

    load_env_file(path)

    assert os.environ["ENV_INJECTOR_TEST_VALUE"] == "from-file"
    monkeypatch.delenv("ENV_INJECTOR_TEST_VALUE")


def test_key_rejected_by_os_does_not_abort_file(tmp_path, monkeypatch):
    monkeypatch.delenv("ENV_INJECTOR_FIRST", raising=False)
    monkeypatch.delenv("ENV_INJECTOR_LAST", raising=False)
    path = write_env(tmp_path, "ENV_INJECTOR_FIRST=1\nA=B:=C\nENV_INJECTOR_LAST=2\n")

    results = load_env_file(path)

    assert os.environ["ENV_INJECTOR_FIRST"] == "1"
    assert os.environ["ENV_INJECTOR_LAST"] == "2"
    assert results[1].error
    monkeypatch.delenv("ENV_INJECTOR_FIRST")
    monkeypatch.delenv("ENV_INJECTOR_LAST")
