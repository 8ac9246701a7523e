"""Testing for logging in the yieldpy package modules"""
from __future__ import annotations

import contextlib
import io
import logging
import os
import tempfile
import unittest

import yieldpy.logs as log_utils
from yieldpy import WAD
from yieldpy.pricing_models import sell_base


class TestLogging(unittest.TestCase):
    """Run the logging tests"""

    def tearDown(self):
        log_utils.remove_handlers(logging.getLogger())

    def test_prepare_log_path(self):
        """a .log extension is appended and the directory is created"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_dir, log_name = log_utils.prepare_log_path(os.path.join(tmp_dir, "nested", "trades"))
            self.assertEqual(log_name, "trades.log")
            self.assertTrue(os.path.isdir(log_dir))

    def test_file_logging(self):
        """debug logs from the pricing functions land in the log file"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_utils.setup_logging(log_filename=os.path.join(tmp_dir, "pricing"), log_level=logging.DEBUG)
            sell_base(1_100_000 * WAD, 2_100_000 * WAD, 1_000 * WAD, 7_776_000)
            log_utils.remove_handlers(logging.getLogger())
            with open(os.path.join(tmp_dir, "pricing.log"), "r", encoding="UTF-8") as file:
                contents = file.read()
            self.assertIn("sell_base", contents)

    def test_stderr_logging(self):
        """without a log file, records go to stderr and nothing is written to stdout"""
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            log_utils.setup_logging(log_level=logging.INFO)
            logging.info("quoting")
        self.assertIn("quoting", stderr.getvalue())
        self.assertEqual(stdout.getvalue(), "")

    def test_log_levels(self):
        """setup replaces any previous handler and sets the root level"""
        for level in [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]:
            log_utils.setup_logging(log_level=level)
            root_logger = logging.getLogger()
            self.assertEqual(len(root_logger.handlers), 1)
            self.assertEqual(root_logger.level, level)
        log_utils.setup_logging()
        self.assertEqual(logging.getLogger().level, log_utils.DEFAULT_LOG_LEVEL)
