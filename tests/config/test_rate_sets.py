"""
Tests for statutory rate-set configuration.

Covers:
- Bundled sets resolve by effective date
- Custom directories, partial documents and precedence
- Malformed documents and missing sets
- PAYROLL_CONFIG_TRACE emission and checksum determinism
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_config import find_rate_set, get_statutory_rates
from payroll_config.loader import compute_checksum, load_rate_set, parse_minute_of_day
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.exceptions import InvalidRateSetError, RateSetNotFoundError


def _write(directory, name, body):
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


class TestBundledSets:

    def test_2025(self):
        rates = get_statutory_rates(date(2025, 3, 1))
        assert rates.version == "kr-2025"
        assert rates.pension == Decimal("0.045")
        assert rates.night_start_minute == 22 * 60
        assert rates.income_tax_brackets == StatutoryRates().income_tax_brackets

    def test_2024(self):
        assert get_statutory_rates(date(2024, 6, 30)).version == "kr-2024"

    def test_open_ended_set_covers_future(self):
        assert get_statutory_rates(date(2030, 1, 1)).version == "kr-2025"

    def test_before_first_set(self):
        with pytest.raises(RateSetNotFoundError) as exc_info:
            get_statutory_rates(date(2023, 12, 31))
        assert exc_info.value.as_of_date == "2023-12-31"

    def test_bundled_values_match_builtin_defaults(self):
        rates = get_statutory_rates(date(2025, 1, 1))
        assert rates == StatutoryRates(version="kr-2025")


class TestCustomDirectory:

    def test_partial_document_keeps_defaults(self, tmp_path):
        _write(tmp_path, "a.yaml", "version: custom\neffective_from: 2025-01-01\npremiums:\n  rate: 0.6\n")
        rates = get_statutory_rates(date(2025, 5, 1), tmp_path)
        assert rates.version == "custom"
        assert rates.premium_rate == Decimal("0.6")
        assert rates.weekly_cap_minutes == 2_400

    def test_latest_effective_set_wins(self, tmp_path):
        _write(tmp_path, "old.yaml", "version: old\neffective_from: 2025-01-01\n")
        _write(tmp_path, "new.yaml", "version: new\neffective_from: 2025-07-01\n")
        assert get_statutory_rates(date(2025, 6, 30), tmp_path).version == "old"
        assert get_statutory_rates(date(2025, 7, 1), tmp_path).version == "new"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RateSetNotFoundError):
            get_statutory_rates(date(2025, 1, 1), tmp_path / "nope")

    def test_night_window_as_minutes(self, tmp_path):
        _write(
            tmp_path, "a.yaml",
            "version: v\neffective_from: 2025-01-01\npremiums:\n  night_start: 1260\n  night_end: '05:00'\n",
        )
        rates = get_statutory_rates(date(2025, 1, 1), tmp_path)
        assert rates.night_start_minute == 1_260
        assert rates.night_end_minute == 300


class TestInvalidSets:

    def test_malformed_yaml(self, tmp_path):
        path = _write(tmp_path, "bad.yaml", "version: [unclosed\n")
        with pytest.raises(InvalidRateSetError) as exc_info:
            load_rate_set(path)
        assert exc_info.value.source == str(path)

    def test_missing_version(self, tmp_path):
        path = _write(tmp_path, "a.yaml", "effective_from: 2025-01-01\n")
        with pytest.raises(InvalidRateSetError, match="version"):
            load_rate_set(path)

    def test_top_level_list(self, tmp_path):
        path = _write(tmp_path, "a.yaml", "- 1\n- 2\n")
        with pytest.raises(InvalidRateSetError):
            load_rate_set(path)

    def test_bad_rate(self, tmp_path):
        path = _write(tmp_path, "a.yaml", "version: v\neffective_from: 2025-01-01\ninsurance:\n  pension: abc\n")
        with pytest.raises(InvalidRateSetError):
            load_rate_set(path)

    def test_inverted_window(self, tmp_path):
        path = _write(tmp_path, "a.yaml", "version: v\neffective_from: 2025-02-01\neffective_to: 2025-01-01\n")
        with pytest.raises(InvalidRateSetError, match="precedes"):
            load_rate_set(path)

    def test_inconsistent_rates(self, tmp_path):
        path = _write(
            tmp_path, "a.yaml",
            "version: v\neffective_from: 2025-01-01\nweekly_holiday:\n  threshold_minutes: 3000\n",
        )
        with pytest.raises(InvalidRateSetError):
            load_rate_set(path)

    def test_invalid_set_fails_lookup(self, tmp_path):
        _write(tmp_path, "a.yaml", "version: v\n")
        with pytest.raises(InvalidRateSetError):
            find_rate_set(date(2025, 1, 1), tmp_path)


class TestTraceAndChecksum:

    def test_config_trace_logged(self, captured_logs):
        get_statutory_rates(date(2025, 3, 1))
        (trace,) = [r for r in captured_logs() if r["message"] == "PAYROLL_CONFIG_TRACE"]
        assert trace["rate_set_version"] == "kr-2025"
        assert trace["effective_from"] == "2025-01-01"
        assert trace["effective_to"] is None
        assert trace["as_of"] == "2025-03-01"
        assert len(trace["checksum"]) == 64

    def test_checksum_key_order_independent(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})
        assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})

    def test_same_file_same_checksum(self):
        first = find_rate_set(date(2025, 1, 1))
        second = find_rate_set(date(2025, 1, 1))
        assert first.checksum == second.checksum
        assert first.checksum != find_rate_set(date(2024, 1, 1)).checksum


class TestParseMinuteOfDay:

    @pytest.mark.parametrize("value,expected", [("22:00", 1_320), ("06:30", 390), (90, 90), (None, 7)])
    def test_values(self, value, expected):
        assert parse_minute_of_day(value, 7) == expected
