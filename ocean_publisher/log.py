#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging
import logging.config
import os
from pathlib import Path

import coloredlogs
import yaml

DEFAULT_LOG_CFG = Path(__file__).resolve().parent.parent / "logging.yaml"
LEVELS = {
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
# chatty libraries keep their configured level whatever LOG_LEVEL says
PINNED_LOGGERS = ("urllib3", "web3", "rdflib")

_configured = False


def get_log_level(default_level=logging.INFO):
    return LEVELS.get(os.getenv("LOG_LEVEL", "").upper(), default_level)


def load_logging_config(path, log_level_name=None):
    with open(path, "rt") as f:
        config = yaml.safe_load(f.read())

    if log_level_name:
        for name, logger_config in config.get("loggers", {}).items():
            if name not in PINNED_LOGGERS:
                logger_config["level"] = log_level_name

    return config


def setup_logging(default_path=None, env_key="LOG_CFG", force=False):
    """Configures logging once per process.

    The yaml file is `LOG_CFG`, then `default_path`, then the logging.yaml
    shipped at the repository root. Without any of them, or when the file is
    broken, coloredlogs is installed at `LOG_LEVEL`.
    """
    global _configured
    if _configured and not force:
        return

    path = Path(os.getenv(env_key) or default_path or DEFAULT_LOG_CFG)
    log_level_name = os.getenv("LOG_LEVEL", "").upper() or None
    if log_level_name not in LEVELS:
        log_level_name = None
    level = get_log_level()

    if path.exists():
        try:
            logging.config.dictConfig(load_logging_config(path, log_level_name))
            coloredlogs.install(level=level)
        except Exception as e:
            print(f"Error in logging configuration {path}, using defaults: {e}")
            logging.basicConfig(level=level)
            coloredlogs.install(level=level)
    else:
        logging.basicConfig(level=level)
        coloredlogs.install(level=level)

    _configured = True
