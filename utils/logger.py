"""Centralized logging with masking of IBANs and account numbers."""

from __future__ import annotations

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_IBAN_PATTERN = re.compile(r"\b[A-Z]{2}\d{2}[\dA-Z]{4,}[\dA-Z]{4}\b")
# Account numbers, IT/GR/PL style long digit runs
_ACCOUNT_NUMBER_PATTERN = re.compile(r"(?<![\w-])\d{12,17}(?![\w-])")


class _MaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = mask(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: (mask(v) if isinstance(v, str) else v) for k, v in record.args.items()}
            else:
                record.args = tuple((mask(a) if isinstance(a, str) else a) for a in record.args)
        return True


def _replace(m: re.Match) -> str:  # type: ignore[type-arg]
    full = m.group(0)
    if len(full) < 8:
        return full
    return full[:4] + "*" * (len(full) - 8) + full[-4:]


def mask(text: str) -> str:
    """Hide the middle of every IBAN and long account number in ``text``."""
    text = _IBAN_PATTERN.sub(_replace, text)
    return _ACCOUNT_NUMBER_PATTERN.sub(_replace, text)


def log_dir() -> Path:
    override = os.getenv("ACCOUNTS_LOG_DIR", "").strip()
    return Path(override) if override else Path.home() / ".accounts" / "logs"


def setup_logger(name: str = "accounts") -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    console.addFilter(_MaskingFilter())
    logger.addHandler(console)

    directory = log_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("File logging disabled, cannot create %s: %s", directory, exc)
        return logger

    fh = RotatingFileHandler(
        directory / "accounts.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d – %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    fh.addFilter(_MaskingFilter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
