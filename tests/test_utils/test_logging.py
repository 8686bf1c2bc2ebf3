"""Tests for tezforge logging helpers."""

import logging

import pytest

from tezforge.utils.logging import (
    ROOT_LOGGER_NAME,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    truncate_for_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogger:
    def test_module_names_nest_under_root(self) -> None:
        assert get_logger("tezforge.pipeline.submitter").name == "tezforge.pipeline.submitter"
        assert get_logger("myapp").name == "tezforge.myapp"
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_library_is_silent_by_default(self) -> None:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


class TestConfigureLogging:
    def test_replaces_previous_handler(self) -> None:
        first = logging.StreamHandler()
        second = logging.StreamHandler()

        configure_logging("DEBUG", handler=first)
        root = configure_logging("INFO", handler=second)

        assert second in root.handlers
        assert first not in root.handlers
        assert root.level == logging.INFO

    def test_enable_debug(self) -> None:
        enable_debug()
        assert get_logger("tezforge.chain.rpc").isEnabledFor(logging.DEBUG)

    def test_disable_logging_silences_children(self) -> None:
        disable_logging()
        assert not get_logger("tezforge.forging.forger").isEnabledFor(logging.CRITICAL)

        configure_logging("WARNING", handler=logging.NullHandler())
        assert get_logger("tezforge.forging.forger").isEnabledFor(logging.WARNING)


class TestTruncateForLogging:
    def test_short_values_unchanged(self) -> None:
        assert truncate_for_logging("abc") == "abc"

    def test_non_strings_use_repr(self) -> None:
        assert truncate_for_logging({"a": 1}) == "{'a': 1}"

    def test_long_values_cut(self) -> None:
        text = truncate_for_logging("x" * 50, limit=10)
        assert text == "x" * 10 + "... (40 more chars)"
