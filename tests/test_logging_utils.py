"""Tests logging functions in grid_collage."""
import logging

import grid_collage.logging_utils as gc_logging_utils


class TestLoggingUtils:
    def test_logger_singleton_behavior(self) -> None:
        """Test that logger instances are singleton per name."""
        logger1 = gc_logging_utils.setup_logger("test_logger")
        logger2 = gc_logging_utils.setup_logger("test_logger")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_logger_custom_formatter_and_handler(self) -> None:
        """Test custom formatter and handler are applied."""
        formatter = logging.Formatter("[CUSTOM] %(message)s")
        handler = logging.StreamHandler()
        logger = gc_logging_utils.setup_logger(
            "custom_logger",
            formatter=formatter,
            handler=handler
        )
        assert logger.name == "custom_logger"
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt.startswith("[CUSTOM]")

    def test_set_verbosity_levels(self) -> None:
        """Quiet and verbose flags map onto WARNING and DEBUG."""
        shared = gc_logging_utils.logger
        try:
            gc_logging_utils.set_verbosity(quiet=True)
            assert shared.level == logging.WARNING
            gc_logging_utils.set_verbosity(verbose=True)
            assert shared.level == logging.DEBUG
        finally:
            gc_logging_utils.set_verbosity()
        assert shared.level == logging.INFO
