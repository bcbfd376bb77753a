import logging

from ukvalidator.core.logging import PhoneSafeFilter


def test_phone_filter_redacts_formatted_number(caplog):
    logger = logging.getLogger("test.phone")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(PhoneSafeFilter())

    with caplog.at_level(logging.INFO, logger="test.phone"):
        logger.info("caller %s rejected", "+44 20 7946 0000")
        logger.info("plain 07700900123 in message")

    assert "7946 0000" not in caplog.text
    assert "07700900123" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_phone_filter_redacts_number_assignment(caplog):
    logger = logging.getLogger("test.assign")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(PhoneSafeFilter())

    with caplog.at_level(logging.INFO, logger="test.assign"):
        logger.info("GET /validate?number=0151 for lookup")

    assert "number=0151" not in caplog.text
    assert "number=[REDACTED]" in caplog.text


def test_phone_filter_leaves_counts_alone(caplog):
    logger = logging.getLogger("test.counts")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(PhoneSafeFilter())

    with caplog.at_level(logging.INFO, logger="test.counts"):
        logger.info("Loaded %d rules from %s", 4821, "prefixes.json")

    assert "Loaded 4821 rules from prefixes.json" in caplog.text
