# config/logging_config.py
import os

LOGGING_CONFIG = {
    "console": True,
    "logdir": os.environ.get("LOG_DIR", "./logs"),
    "success_logfile": "success.log",
    "fail_logfile": "fail.log",
    "rotation": {
        "when": "midnight",    # Options: 'S', 'M', 'H', 'D', 'midnight', 'W0'–'W6'
        "interval": 1,
        "backupCount": 10
    },
    "log_type": "both", # Options: fail_only, success_only, both
    "mode": "both", # Options: master, module, both
}
