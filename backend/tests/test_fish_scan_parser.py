"""Tests for the bilingual fish analysis text parser."""
from __future__ import annotations

import pytest

from fish_scan import parse_number, parse_scan_text

SAMPLE = """
Common Name: Red Snapper
Species: Lutjanus campechanus
Total Number of Fish: 3
Average Fish Size: 30
Estimated Weight per Fish: 3
Total Estimated Weight: 12
-----------------------------
Tên thông thường: Cá Hồng
Species: Lutjanus campechanus
Tổng số cá: 3
Kích thước cá trung bình: 30
Khối lượng ước tính mỗi con: 3
"""


class TestParseScanText:
    def test_english_block(self):
        result = parse_scan_text(SAMPLE)
        assert result.en.common_name == "Red Snapper"
        assert result.en.species == "Lutjanus campechanus"
        assert result.en.total_number_of_fish == "3"
        assert result.en.total_estimated_weight == "12"

    def test_vietnamese_block_starts_at_sentinel(self):
        result = parse_scan_text(SAMPLE)
        assert result.vi.common_name == "Cá Hồng"
        assert result.vi.average_fish_size == "30"
        assert result.en.common_name == "Red Snapper"

    def test_missing_vietnamese_values_fall_back_to_english(self):
        result = parse_scan_text(SAMPLE)
        assert result.vi.total_estimated_weight == "12"

    def test_value_keeps_text_after_first_colon(self):
        result = parse_scan_text("Average Fish Size: 30 cm (range: 25-35)")
        assert result.en.average_fish_size == "30 cm (range: 25-35)"

    def test_unknown_keys_and_noise_are_ignored(self):
        result = parse_scan_text("Hello there\nHabitat: reef\nCommon Name: Grouper\n")
        assert result.en.common_name == "Grouper"
        assert result.vi.common_name == "Grouper"

    def test_empty_text(self):
        result = parse_scan_text("")
        assert result.en.common_name == ""
        assert result.vi.species == ""


class TestParseNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12", 12.0),
            ("1,250.5 kg", 1250.5),
            ("about 3 fish", 3.0),
            ("30-35 cm", 30.0),
        ],
    )
    def test_extracts_first_number(self, value, expected):
        assert parse_number(value) == expected

    def test_default_when_missing(self):
        assert parse_number("n/a") == 0.0
        assert parse_number(None, default=5.0) == 5.0
        assert parse_number("", default=1.0) == 1.0
