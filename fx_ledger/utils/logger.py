"""Logging utilities for the fx_ledger package."""

from __future__ import annotations

import logging

_CONFIGURED = False


def get_logger(name: str = "fx_ledger") -> logging.Logger:
    """Return a named logger, configuring the root handler on first use."""
    global _CONFIGURED
    if not _CONFIGURED:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _CONFIGURED = True
    return logging.getLogger(name)
