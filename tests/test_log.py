#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging

from ocean_publisher.log import (
    DEFAULT_LOG_CFG,
    get_log_level,
    load_logging_config,
    setup_logging,
)


def test_load_logging_config():
    config = load_logging_config(DEFAULT_LOG_CFG, "DEBUG")
    assert config["loggers"]["ocean_publisher"]["level"] == "DEBUG"
    assert config["loggers"]["urllib3"]["level"] == "WARNING"
    assert config["loggers"]["web3"]["level"] == "WARNING"

    config = load_logging_config(DEFAULT_LOG_CFG)
    assert config["loggers"]["ocean_publisher"]["level"] == "INFO"


def test_get_log_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert get_log_level() == logging.INFO

    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("LOG_LEVEL", "verbose")
    assert get_log_level(logging.WARNING) == logging.WARNING


def test_setup_logging_with_broken_config(monkeypatch, tmp_path, capsys):
    broken = tmp_path / "logging.yaml"
    broken.write_text("version: 1\nhandlers: [not, a, mapping]\n")
    monkeypatch.setenv("LOG_CFG", str(broken))

    setup_logging(force=True)
    assert "Error in logging configuration" in capsys.readouterr().out

    monkeypatch.delenv("LOG_CFG")
    setup_logging(force=True)
    assert logging.getLogger("urllib3").level == logging.WARNING
