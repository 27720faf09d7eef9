from pathlib import Path

from config import config_loader
from config.config_loader import load_store_config, load_backup_config, reset_config_cache


def _write_ini(tmp_path, monkeypatch, text):
    ini = tmp_path / "config.ini"
    ini.write_text(text, encoding="utf-8")
    monkeypatch.setenv("CONFIG_FILE", str(ini))
    reset_config_cache()


def test_defaults_without_ini_or_env():
    store = load_store_config()

    assert store["backend"] == "json"
    assert store["data_dir"] == Path("data")
    assert store["jobs_path"] == Path("data") / "jobs.json"
    assert store["decks_path"] == Path("data") / "decks.json"

    backup = load_backup_config()
    assert backup["backup_dir"] == Path("data") / "backups"
    assert backup["keep"] == 7
    assert backup["sources"] == [store["jobs_path"], store["decks_path"]]


def test_env_vars_fill_missing_values(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("STORE_BACKEND", "sqlite")
    monkeypatch.setenv("BACKUP_KEEP", "3")

    store = load_store_config()
    assert store["backend"] == "sqlite"
    assert store["db_path"] == tmp_path / "state" / "store.db"

    backup = load_backup_config()
    assert backup["keep"] == 3
    assert backup["sources"] == [tmp_path / "state" / "store.db"]


def test_ini_takes_precedence_over_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "from-env"))
    _write_ini(tmp_path, monkeypatch, f"""
[store]
data_dir = {tmp_path / 'from-ini'}
jobs_file = j.json

[backup]
backup_dir = {tmp_path / 'bk'}
keep = 2
""")

    store = load_store_config()
    assert store["data_dir"] == tmp_path / "from-ini"
    assert store["jobs_path"] == tmp_path / "from-ini" / "j.json"

    backup = load_backup_config()
    assert backup["backup_dir"] == tmp_path / "bk"
    assert backup["keep"] == 2


def test_unknown_backend_falls_back_to_json(tmp_path, monkeypatch):
    _write_ini(tmp_path, monkeypatch, "[store]\nbackend = redis\n")
    assert load_store_config()["backend"] == "json"


def test_invalid_keep_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("BACKUP_KEEP", "lots")
    assert load_backup_config()["keep"] == 7


def test_config_is_cached(tmp_path, monkeypatch):
    _write_ini(tmp_path, monkeypatch, "[store]\nbackend = sqlite\n")
    assert load_store_config()["backend"] == "sqlite"

    (tmp_path / "config.ini").write_text("[store]\nbackend = json\n", encoding="utf-8")
    assert load_store_config()["backend"] == "sqlite"

    config_loader.reset_config_cache()
    assert load_store_config()["backend"] == "json"
