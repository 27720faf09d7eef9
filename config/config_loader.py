import configparser, os
from pathlib import Path
from core.logging_manager import setup_loggers

success_logger, fail_logger = setup_loggers(logger_name="config_loader")

DEFAULT_CONFIG_FILE = "config/config.ini"
_config_cache = None


def _config_file():
    return os.environ.get("CONFIG_FILE", DEFAULT_CONFIG_FILE)


def _get_config():
    global _config_cache
    if _config_cache is None:
        config = configparser.ConfigParser()
        read = config.read(_config_file())
        if not read:
            success_logger.info(f"{_config_file()} not found, using environment and defaults")
        _config_cache = config
    return _config_cache


def reset_config_cache():
    global _config_cache
    _config_cache = None


def _lookup(section, key, env_var=None, default=None):
    # config.ini first, then env var, then built-in default
    value = None
    try:
        value = _get_config()[section].get(key)
    except KeyError:
        pass

    if not value and env_var:
        value = os.environ.get(env_var)

    return value or default


def load_store_config():
    """
    Load store settings with precedence:
    1. config/config.ini [store]
    2. environment variables DATA_DIR / STORE_BACKEND
    3. defaults (json backend under ./data)
    """
    data_dir = Path(_lookup("store", "data_dir", "DATA_DIR", "data")).expanduser()
    backend = _lookup("store", "backend", "STORE_BACKEND", "json").strip().lower()

    if backend not in ("json", "sqlite"):
        fail_logger.error(f"Unknown store backend '{backend}' in {_config_file()}, falling back to json")
        backend = "json"

    return {
        "backend": backend,
        "data_dir": data_dir,
        "jobs_path": data_dir / _lookup("store", "jobs_file", default="jobs.json"),
        "decks_path": data_dir / _lookup("store", "decks_file", default="decks.json"),
        "db_path": data_dir / _lookup("store", "db_file", default="store.db"),
    }


def load_backup_config():
    store = load_store_config()

    backup_dir = _lookup("backup", "backup_dir", "BACKUP_DIR")
    backup_dir = Path(backup_dir).expanduser() if backup_dir else store["data_dir"] / "backups"

    keep = _lookup("backup", "keep", "BACKUP_KEEP", "7")
    try:
        keep = int(keep)
    except ValueError:
        fail_logger.error(f"Invalid backup keep value '{keep}', using 7")
        keep = 7

    if store["backend"] == "sqlite":
        sources = [store["db_path"]]
    else:
        sources = [store["jobs_path"], store["decks_path"]]

    return {
        "backup_dir": backup_dir,
        "keep": keep,
        "sources": sources,
    }
