# src/iview/logging_utils.py
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "iview"


def setup_logger(debug: bool = False, name: str = LOGGER_NAME) -> logging.Logger:
    """iview ロガーを stderr の RichHandler で設定する（二重登録しない）"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger
