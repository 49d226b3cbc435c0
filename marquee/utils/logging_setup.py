# marquee/utils/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime

_FMT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, *, log_to_file: bool = False, log_dir: str = "logs") -> None:
    """
    Configure root logging with a readable format and optional file sink.
    Silences noisy third-party loggers by default.
    """
    logging.basicConfig(level=level, format=_FMT, datefmt=_DATEFMT)

    # Tone down chatty libraries
    for noisy in ("PIL", "asyncio", "OpenGL"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        fh = logging.FileHandler(os.path.join(log_dir, f"marquee-{ts}.log"), encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(_FMT, _DATEFMT))
        logging.getLogger().addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Namespaced logger under the `marquee` hierarchy."""
    if name == "marquee" or name.startswith("marquee."):
        return logging.getLogger(name)
    return logging.getLogger(f"marquee.{name}")
