"""Tests for log redaction, the colored formatter and the timing helper."""
import logging

import pytest

from conftest import NAMESPACE_ID
from util.logger import REDACTED, ColoredFormatter, RedactTokensFilter
from util.timing import timed


def make_record(msg, *args, level=logging.INFO):
    return logging.LogRecord("dropspace", level, __file__, 1, msg, args, None)


class TestRedactTokensFilter:
    def test_token_in_args_is_redacted(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        record = make_record("auth header=%s ns=%s", f"Bearer {token}", NAMESPACE_ID)
        assert RedactTokensFilter().filter(record) is True
        out = record.getMessage()
        assert token not in out
        assert out == f"auth header=Bearer {REDACTED} ns={NAMESPACE_ID}"

    def test_other_messages_untouched(self):
        record = make_record("namespace.append.ok ns=%s record=%d", NAMESPACE_ID, 3)
        RedactTokensFilter().filter(record)
        assert record.args == (NAMESPACE_ID, 3)
        assert record.getMessage() == f"namespace.append.ok ns={NAMESPACE_ID} record=3"


class TestColoredFormatter:
    def test_levelname_not_mutated(self):
        record = make_record("hello", level=logging.WARNING)
        out = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[33mWARNING\033[0m" in out
        assert record.levelname == "WARNING"


class TestTimed:
    def test_failure_logged_and_reraised(self, caplog):
        log = logging.getLogger("dropspace.test")
        with caplog.at_level(logging.DEBUG, logger="dropspace.test"):
            with pytest.raises(RuntimeError):
                with timed(log, "tenant.append", ns=NAMESPACE_ID):
                    raise RuntimeError("boom")
        assert "tenant.append.done" in caplog.text
        assert "ok=False" in caplog.text
        assert f"ns={NAMESPACE_ID}" in caplog.text
