from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# Package logger, whether imported as `wash_payroll` or via the `src.` path.
_ROOT = __name__.rsplit(".common", 1)[0]


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger (idempotent)."""

    logger = logging.getLogger(_ROOT)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_wash_payroll", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wash_payroll = True
        logger.addHandler(handler)

    return logger
