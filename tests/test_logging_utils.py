import logging

import numpy as np
import pytest
from shapely.geometry import Point

from eulerlayout.logging_utils import _safe_repr, apply_debug_logging, debug_log_call

logger = logging.getLogger("eulerlayout.tests.logging")


def test_geometry_is_summarized():
    rendered = _safe_repr(Point(0.0, 0.0).buffer(1.0))
    assert rendered.startswith("Polygon(area=3.1")
    assert "bounds=(-1, -1, 1, 1)" in rendered


def test_large_array_is_summarized():
    rendered = _safe_repr(np.arange(100.0))
    assert "shape=(100,)" in rendered
    assert "min=0" in rendered
    assert "max=99" in rendered


def test_long_sequences_are_cut():
    assert _safe_repr(list(range(10))) == "[0, 1, 2, 3, 4, ...]"


def test_debug_log_call_logs_entry_and_exit(caplog):
    @debug_log_call(logger)
    def area(radius):
        return Point(0.0, 0.0).buffer(radius)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        area(2.0)

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0].startswith("Entering ")
    assert "args=[2.0]" in messages[0]
    assert messages[1].startswith("Exiting ")
    assert "Polygon(area=" in messages[1]


def test_debug_log_call_reraises(caplog):
    @debug_log_call(logger)
    def fail():
        raise ValueError("boom")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with pytest.raises(ValueError):
            fail()

    assert any(record.exc_info for record in caplog.records)


def test_apply_debug_logging_wraps_module_functions_and_methods():
    def helper():
        return 1

    class Worker:
        def run(self):
            return 2

    helper.__module__ = "fake_module"
    Worker.__module__ = "fake_module"
    Worker.run.__module__ = "fake_module"
    namespace = {"__name__": "fake_module", "helper": helper, "Worker": Worker}

    apply_debug_logging(namespace, logger=logger, skip={"Worker.skipped"})

    assert getattr(namespace["helper"], "_debug_logging_wrapped", False)
    assert getattr(Worker.run, "_debug_logging_wrapped", False)
    assert namespace["helper"]() == 1
    assert Worker().run() == 2
