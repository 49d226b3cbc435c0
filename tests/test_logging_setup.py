# tests/test_logging_setup.py
from __future__ import annotations

import logging

from marquee.core import safe_main
from marquee.utils.logging_setup import configure_logging, get_logger


def test_get_logger_is_namespaced():
    assert get_logger("selection").name == "marquee.selection"
    assert get_logger("marquee.core").name == "marquee.core"
    assert get_logger("marquee").name == "marquee"
    assert safe_main.log.name == "marquee.safe_main"


def test_file_sink_is_created(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        configure_logging(logging.DEBUG, log_to_file=True, log_dir=str(tmp_path / "logs"))
        files = list((tmp_path / "logs").glob("marquee-*.log"))
        assert len(files) == 1
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
