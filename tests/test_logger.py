import logging
import os
import tempfile
import unittest

from rich.logging import RichHandler

from wtf.config import Config
from wtf.logger import LOG_FILE_NAME, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Test cases for setup_logging."""

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        for handler in list(self.root.handlers):
            if handler not in self.saved_handlers:
                self.root.removeHandler(handler)
                handler.close()
        self.root.setLevel(self.saved_level)
        self.tmp.cleanup()

    def added_handlers(self):
        return [h for h in self.root.handlers if h not in self.saved_handlers]

    def test_handlers_and_level(self):
        log_dir = os.path.join(self.tmp.name, "logs")
        setup_logging(Config(api_key="k", model="m", log_dir=log_dir))

        self.assertEqual(self.root.level, logging.WARNING)
        handlers = self.added_handlers()
        self.assertEqual(len(handlers), 2)
        self.assertTrue(any(isinstance(h, RichHandler) for h in handlers))
        self.assertTrue(os.path.exists(os.path.join(log_dir, LOG_FILE_NAME)))

    def test_verbose_and_repeatable(self):
        config = Config(api_key="k", model="m", verbose=True, log_dir=self.tmp.name)
        setup_logging(config)
        setup_logging(config)

        self.assertEqual(self.root.level, logging.INFO)
        self.assertEqual(len(self.added_handlers()), 2)

    def test_unwritable_log_dir(self):
        blocker = os.path.join(self.tmp.name, "file")
        with open(blocker, "w") as f:
            f.write("")

        setup_logging(Config(api_key="k", model="m", log_dir=os.path.join(blocker, "logs")))

        handlers = self.added_handlers()
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], RichHandler)


if __name__ == "__main__":
    unittest.main()
