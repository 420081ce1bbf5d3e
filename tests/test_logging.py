import logging

from poem_prosody.config import Settings
from poem_prosody.core.rhyme import detect_rhyme_scheme
from poem_prosody.utils.logging_config import _resolve_level
from poem_prosody.utils.observability import (
    create_counter,
    create_histogram,
    get_logger,
    start_span,
)


def test_structured_logger_renders_bound_context(caplog):
    logger = get_logger("poem_prosody.tests").bind(component="tests")

    caplog.set_level(logging.INFO, logger="poem_prosody.tests")
    logger.info("Something happened", context={"lines": 3})

    message = caplog.records[-1].getMessage()
    assert message.startswith("Something happened | ")
    assert '"component": "tests"' in message
    assert '"lines": 3' in message


def test_rhyme_scheme_detection_logs_at_debug(caplog, mini_loader):
    caplog.set_level(logging.DEBUG, logger="poem_prosody.core.rhyme")

    detect_rhyme_scheme(["the cat", "the hat"], mini_loader)

    messages = [record.getMessage() for record in caplog.records if record.name == "poem_prosody.core.rhyme"]
    assert any("Detected rhyme scheme" in message and '"scheme": "AA"' in message for message in messages)


def test_metric_handles_tolerate_re_registration():
    first = create_counter("poem_prosody_test_events_total", "Test events", label_names=("kind",))
    second = create_counter("poem_prosody_test_events_total", "Test events", label_names=("kind",))

    first.labels(kind="a").inc()
    second.labels(kind="a").inc(2)

    histogram = create_histogram("poem_prosody_test_seconds", "Test timings")
    with histogram.time():
        pass


def test_spans_work_without_an_sdk():
    with start_span("poem_prosody.test", {"poem.lines": 2}) as span:
        assert span is not None


def test_level_resolution():
    assert _resolve_level(None) == logging.INFO
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level("10") == logging.DEBUG
    assert _resolve_level("nonsense") == logging.INFO


def test_settings_from_environment(tmp_path):
    settings = Settings.from_env(
        {"POEM_PROSODY_LOG_LEVEL": "WARNING", "POEM_PROSODY_CMUDICT_PATH": str(tmp_path / "dict")}
    )

    assert settings.log_level == "WARNING"
    assert settings.cmudict_path == tmp_path / "dict"
    assert Settings.from_env({}) == Settings()
