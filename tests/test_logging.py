import pytest
import structlog

from themepack.logging import configure_logging, get_logger


def test_quiet_drops_info_and_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(quiet=True)
    log = get_logger("themepack.tests.quiet")

    log.debug("debug event")
    log.info("info event")
    log.warning("warning event")

    err = capsys.readouterr().err
    assert "debug event" not in err
    assert "info event" not in err
    assert "warning event" in err


def test_level_filter_runs_before_other_processors() -> None:
    configure_logging(quiet=True)
    assert structlog.get_config()["processors"][0] is structlog.stdlib.filter_by_level


def test_json_log(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(json_log=True)
    get_logger("themepack.tests.json").info("listed tracked files", count=3)

    err = capsys.readouterr().err
    assert '"event": "listed tracked files"' in err
    assert '"count": 3' in err
