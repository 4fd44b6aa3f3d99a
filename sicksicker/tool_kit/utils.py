"""
Miscellaneous utility functions.
"""
import logging
import logging.config
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"


def set_logging_config(verbose: bool = True, logfile: str = None, level: str = "INFO"):
    """
    Configures the root logger to write to a file and/or the console.
    """
    root_logger = {"level": level, "handlers": []}
    handlers = {}
    if logfile:
        logdir = os.path.dirname(logfile)
        if logdir:
            os.makedirs(logdir, exist_ok=True)

        root_logger["handlers"].append("file")
        handlers["file"] = {
            "level": level,
            "class": "logging.FileHandler",
            "filename": logfile,
            "formatter": "app",
            "encoding": "utf-8",
        }

    if verbose:
        root_logger["handlers"].append("stream")
        handlers["stream"] = {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "app",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": root_logger,
            "handlers": handlers,
            "formatters": {
                "app": {
                    "format": LOG_FORMAT,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
        }
    )
