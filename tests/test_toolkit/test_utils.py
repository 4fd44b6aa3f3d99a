import logging

from sicksicker.tool_kit.timer import Timer
from sicksicker.tool_kit.utils import set_logging_config


def test_set_logging_config__writes_to_logfile(tmp_path):
    logfile = tmp_path / "log" / "calibration.log"
    root = logging.getLogger()
    old_handlers, old_level = list(root.handlers), root.level
    try:
        set_logging_config(verbose=False, logfile=str(logfile))
        logging.getLogger("sicksicker.test").info("Calibration started")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)

    text = logfile.read_text()
    assert "[INFO] sicksicker.test Calibration started" in text


def test_timer__logs_start_and_finish(caplog):
    with caplog.at_level(logging.INFO, logger="sicksicker.tool_kit.timer"):
        with Timer("running the model"):
            pass

    assert "Running the model..." in caplog.text
    assert "Finished running the model in" in caplog.text
