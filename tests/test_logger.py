import io
import logging
import unittest

from wordtravel.utils.logger import configure_logging, get_logger, resolve_level


class LoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level

    def tearDown(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)

    def test_resolve_level_accepts_names_and_numbers(self) -> None:
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" Warning "), logging.WARNING)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_level("chatty"), logging.INFO)

    def test_configure_logging_writes_formatted_records(self) -> None:
        stream = io.StringIO()
        configure_logging("debug", stream=stream)
        self.assertEqual(len(logging.getLogger().handlers), 1)

        get_logger("wordtravel.engine.generator").debug("Placed %d pairs", 3)
        line = stream.getvalue().strip()
        self.assertIn("| DEBUG   | wordtravel.engine.generator | Placed 3 pairs", line)

    def test_default_logger_name(self) -> None:
        self.assertEqual(get_logger().name, "wordtravel")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
