from config.logging_config import LOGGING_CONFIG
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler
import logging

_FORMATTER = logging.Formatter('[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s')


def _file_handler(path: Path) -> TimedRotatingFileHandler:
    rotation = LOGGING_CONFIG["rotation"]
    handler = TimedRotatingFileHandler(
        path,
        when=rotation["when"],
        interval=rotation["interval"],
        backupCount=rotation["backupCount"],
        encoding="utf-8",
    )
    handler.setFormatter(_FORMATTER)
    return handler


def _attach(logger: logging.Logger, log_dir: Path, logger_name: str, logfile: str, mode: str):
    if mode in ("module", "both"):
        logger.addHandler(_file_handler(log_dir / f"{logger_name}_{logfile}"))
    if mode in ("master", "both"):
        logger.addHandler(_file_handler(log_dir / f"master_{logfile}"))
    if LOGGING_CONFIG["console"]:
        console = logging.StreamHandler()
        console.setFormatter(_FORMATTER)
        logger.addHandler(console)


def setup_loggers(logger_name: str = "default", mode: str = None, log_type: str = None):
    """
    Create success and fail loggers with support for module-specific, master-only, or both.

    Args:
        logger_name (str): Name of the logger (e.g. 'json_job_store', 'backup').
        mode (str): 'module', 'master', or 'both' to control log destinations.
        log_type (str): 'success_only', 'fail_only', or 'both'.

    Returns:
        (success_logger, fail_logger)
    """
    # Read from config if not provided
    mode = mode or LOGGING_CONFIG.get("mode", "both")
    log_type = log_type or LOGGING_CONFIG.get("log_type", "both")

    log_dir = Path(LOGGING_CONFIG["logdir"])
    log_dir.mkdir(parents=True, exist_ok=True)

    # --- Success logger ---
    success_logger = logging.getLogger(f"{logger_name}_success")
    success_logger.setLevel(logging.INFO)
    success_logger.handlers.clear()
    if log_type in ("success_only", "both"):
        _attach(success_logger, log_dir, logger_name, LOGGING_CONFIG["success_logfile"], mode)

    # --- Fail logger ---
    # WARNING so recovered corruption is still visible
    fail_logger = logging.getLogger(f"{logger_name}_fail")
    fail_logger.setLevel(logging.WARNING)
    fail_logger.handlers.clear()
    if log_type in ("fail_only", "both"):
        _attach(fail_logger, log_dir, logger_name, LOGGING_CONFIG["fail_logfile"], mode)

    # Return based on log_type
    if log_type == "success_only":
        return success_logger, None
    elif log_type == "fail_only":
        return None, fail_logger
    else:
        return success_logger, fail_logger
