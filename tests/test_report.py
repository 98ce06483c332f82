"""
Tests for report formatting helpers and the report model.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from s3meta.bounded import Bounded
from s3meta.report import ReportWriter, comma, format_bytes, format_duration


class TestFormatting(unittest.TestCase):

    def test_comma(self):
        self.assertEqual(comma(1), "1")
        self.assertEqual(comma(100), "100")
        self.assertEqual(comma(1000), "1,000")
        self.assertEqual(comma(100000), "100,000")
        self.assertEqual(comma(1000000), "1,000,000")

    def test_format_bytes(self):
        b = 512
        self.assertEqual(format_bytes(b), "512B")
        self.assertEqual(format_bytes(b ** 2), "262.14kB")
        self.assertEqual(format_bytes(b ** 3), "134.22MB")
        self.assertEqual(format_bytes(b ** 4), "68.72GB")
        self.assertEqual(format_bytes(b ** 5), "35.18TB")
        self.assertEqual(format_bytes(b ** 6), "18.01PB")

    def test_format_bytes_trims_zeros(self):
        self.assertEqual(format_bytes(0), "0B")
        self.assertEqual(format_bytes(1000), "1kB")
        self.assertEqual(format_bytes(1500), "1.5kB")
        self.assertEqual(format_bytes(999), "999B")

    def test_format_duration(self):
        self.assertEqual(format_duration(0), "0s")
        self.assertEqual(format_duration(59), "59s")
        self.assertEqual(format_duration(60), "1m")
        self.assertEqual(format_duration(3725), "1h 2m 5s")
        self.assertEqual(format_duration(90061), "1day 1h 1m 1s")
        self.assertEqual(format_duration(2 * 86400), "2days")


class TestReportWriter(unittest.TestCase):

    def test_text_layout(self):
        writer = ReportWriter()
        writer.head("general")
        writer.pair("total_files", "3")
        writer.head("extensions")
        writer.pair("unique_extensions", 2)

        self.assertEqual(writer.report.to_text(),
                         "[general]\ntotal_files=3\n\n[extensions]\nunique_extensions=2")

    def test_pair_requires_head(self):
        with self.assertRaises(RuntimeError):
            ReportWriter().pair("x", 1)

    def test_unset_bound_writes_nothing(self):
        writer = ReportWriter()
        writer.head("file_size")
        writer.bound("largest_file", Bounded(),
                     lambda v: writer.pair("largest_file_size", v))

        self.assertEqual(writer.report.section("file_size").pairs, [])

    def test_bound_with_ties(self):
        writer = ReportWriter()
        writer.head("file_size")
        writer.bound("largest_file", Bounded(value=9, key="k", count=3),
                     lambda v: writer.pair("largest_file_size", v))

        self.assertEqual(writer.report.section("file_size").pairs,
                         [("largest_file_size", "9"), ("largest_file_name", "k"),
                          ("largest_file_others", "3")])


if __name__ == '__main__':
    unittest.main()
