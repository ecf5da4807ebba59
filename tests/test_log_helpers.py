from __future__ import annotations

import contextlib
import io
import unittest

import log_helpers


class LogHelpersTests(unittest.TestCase):
    def setUp(self) -> None:
        self._level = log_helpers.log_level()
        self.addCleanup(log_helpers.set_log_level, self._level)

    def test_log_writes_prefixed_lines_to_stderr(self) -> None:
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            log_helpers.log("[run] hello")
        self.assertEqual(stdout.getvalue(), "")
        self.assertTrue(stderr.getvalue().startswith("+["))
        self.assertIn("[run] hello", stderr.getvalue())

    def test_verbose_lines_follow_the_level(self) -> None:
        stderr = io.StringIO()
        log_helpers.set_log_level(1)
        with contextlib.redirect_stderr(stderr):
            log_helpers.log_verbose(3, "hidden")
        self.assertEqual(stderr.getvalue(), "")
        self.assertEqual(log_helpers.set_log_level("debug"), 3)
        with contextlib.redirect_stderr(stderr):
            log_helpers.log_verbose(3, "shown")
        self.assertIn("shown", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
