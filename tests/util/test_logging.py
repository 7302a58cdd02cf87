import logging

from soappost.util.logging import KeyValueFormatter, configure_logging, get_logger


def _record(**extra):
    record = logging.LogRecord("soappost.test", logging.INFO, __file__, 1, "posted", None, None)
    record.__dict__.update(extra)
    return record


def test_formatter_appends_sorted_context():
    fmt = KeyValueFormatter("%(message)s")

    line = fmt.format(_record(url="http://x", status=404))

    assert line == "posted | status=404 url=http://x"


def test_formatter_skips_placeholders():
    fmt = KeyValueFormatter("%(message)s")

    assert fmt.format(_record(url="-", status="-")) == "posted"


def test_adapter_merges_defaults_and_call_extra(caplog):
    caplog.set_level("INFO", logger="soappost")
    log = get_logger("soappost.test", url="http://default")

    log.info("one")
    log.info("two", extra={"status": 500})

    first, second = caplog.records[-2:]
    assert (first.url, first.status) == ("http://default", "-")
    assert (second.url, second.status) == ("http://default", 500)


def test_configure_logging_sets_level_and_handler():
    configure_logging("DEBUG")
    try:
        logger = logging.getLogger("soappost")
        assert logger.level == logging.DEBUG
        assert any(isinstance(h.formatter, KeyValueFormatter) for h in logger.handlers)
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
