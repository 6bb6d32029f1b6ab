"""
test_duration.py - Tests for timestamp_timeout conversion
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.duration import timeout_to_seconds
from core.errors import FormatError

class TestTimeoutToSeconds(unittest.TestCase):
    def test_whole_minutes(self):
        self.assertEqual(timeout_to_seconds("10"), 600)
        self.assertEqual(timeout_to_seconds("+10"), 600)
        self.assertEqual(timeout_to_seconds("0"), 0)

    def test_negative(self):
        self.assertEqual(timeout_to_seconds("-10"), -600)
        self.assertEqual(timeout_to_seconds("-1"), -60)

    def test_fraction(self):
        self.assertEqual(timeout_to_seconds("2.5"), 150)
        self.assertEqual(timeout_to_seconds("5.5"), 330)
        self.assertEqual(timeout_to_seconds("-1.5"), -90)

    def test_fraction_truncates(self):
        # 0.599 min = 35.94s
        self.assertEqual(timeout_to_seconds("10.599"), 635)
        self.assertEqual(timeout_to_seconds("0.034"), 2)
        self.assertEqual(timeout_to_seconds("0.0001"), 0)

    def test_invalid(self):
        for value in ["--10", "10_", "", "abc", "1.", ".5", "1 0", "10\n", None]:
            with self.subTest(value=value):
                with self.assertRaises(FormatError):
                    timeout_to_seconds(value)

    def test_error_names_value(self):
        with self.assertRaises(FormatError) as ctx:
            timeout_to_seconds("--10")
        self.assertEqual(ctx.exception.value, "--10")
        self.assertIn("timestamp_timeout", str(ctx.exception))

if __name__ == '__main__':
    unittest.main()
