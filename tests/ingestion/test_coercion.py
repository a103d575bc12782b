"""
Tests for value coercion.

Covers:
- Boolean tokens, integers with separators, signed amounts
- Date and time parsing including 24:00
- Pay, employment and pay-rule tokens
- Blank values are unset, not errors
"""

from datetime import date, datetime, time

import pytest

from payroll_ingestion.mapping.coercion import (
    coerce_bool,
    coerce_date,
    coerce_employment_type,
    coerce_int,
    coerce_pay_rule_start_day,
    coerce_pay_rule_type,
    coerce_pay_type,
    coerce_str,
    coerce_time,
)
from payroll_kernel.domain.records import EmploymentType, PayRuleType, PayType


class TestCoerceBool:

    @pytest.mark.parametrize("value", [True, "true", "TRUE", "1", 1, "yes", "on", "Y"])
    def test_true(self, value):
        assert coerce_bool(value).value is True

    @pytest.mark.parametrize("value", [False, "false", "0", 0, "no", "off"])
    def test_false(self, value):
        assert coerce_bool(value).value is False

    @pytest.mark.parametrize("value", ["maybe", 2])
    def test_invalid(self, value):
        result = coerce_bool(value, "pay_night")
        assert not result.success
        assert result.error.code == "INVALID_BOOLEAN"
        assert result.error.field == "pay_night"

    def test_blank_is_unset(self):
        result = coerce_bool("  ")
        assert result.success
        assert result.value is None


class TestCoerceInt:

    @pytest.mark.parametrize("value,expected", [(10030, 10030), ("10,030", 10030), ("9860.0", 9860)])
    def test_valid(self, value, expected):
        assert coerce_int(value).value == expected

    def test_fraction_rejected(self):
        assert coerce_int("10.5").error.code == "INVALID_INTEGER"

    def test_text_rejected(self):
        assert coerce_int("ten").error.code == "INVALID_INTEGER"

    def test_bool_rejected(self):
        assert not coerce_int(True).success

    def test_negative_rejected_by_default(self):
        assert coerce_int(-1).error.code == "NEGATIVE_AMOUNT"

    def test_negative_allowed(self):
        assert coerce_int("-50,000", allow_negative=True).value == -50_000


class TestCoerceDate:

    def test_iso(self):
        assert coerce_date("2025-03-03").value == date(2025, 3, 3)

    def test_timestamp_keeps_date(self):
        assert coerce_date("2025-03-03T15:00:00Z").value == date(2025, 3, 3)
        assert coerce_date(datetime(2025, 3, 3, 9, 0)).value == date(2025, 3, 3)

    def test_invalid(self):
        assert coerce_date("03/03/2025").error.code == "INVALID_DATE_FORMAT"


class TestCoerceTime:

    @pytest.mark.parametrize(
        "value,expected",
        [("09:00", time(9, 0)), ("22:30:00", time(22, 30)), ("24:00", time(0, 0)), (time(8, 15, 30), time(8, 15))],
    )
    def test_valid(self, value, expected):
        assert coerce_time(value).value == expected

    @pytest.mark.parametrize("value", ["25:00", "9am", "12:60", "24:30"])
    def test_invalid(self, value):
        assert coerce_time(value).error.code == "INVALID_TIME_FORMAT"


class TestEnumTokens:

    def test_pay_type(self):
        assert coerce_pay_type("Monthly").value == PayType.MONTHLY
        assert coerce_pay_type("weekly").error.code == "INVALID_PAY_TYPE"
        assert coerce_pay_type(None).value is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("four_insurance", EmploymentType.FOUR_INSURANCE),
            ("four-major-insurance", EmploymentType.FOUR_INSURANCE),
            ("freelancer", EmploymentType.FREELANCE),
            ("freelancer_33", EmploymentType.FREELANCE),
            ("freelance", EmploymentType.FREELANCE),
            ("", EmploymentType.FREELANCE),
            (None, EmploymentType.FREELANCE),
        ],
    )
    def test_employment_type(self, value, expected):
        assert coerce_employment_type(value).value == expected


class TestPayRule:

    def test_rule_type(self):
        assert coerce_pay_rule_type("Week").value == PayRuleType.WEEK
        assert coerce_pay_rule_type("month").value == PayRuleType.MONTH
        assert coerce_pay_rule_type("").value is None
        assert coerce_pay_rule_type("biweekly").error.code == "INVALID_PAY_RULE"

    @pytest.mark.parametrize("value,expected", [("25", 25), (1, 1), (28, 28), (0, None), (None, None)])
    def test_start_day(self, value, expected):
        result = coerce_pay_rule_start_day(value)
        assert result.success
        assert result.value == expected

    @pytest.mark.parametrize("value,code", [(29, "INVALID_PAY_RULE"), ("x", "INVALID_INTEGER"), (-1, "NEGATIVE_AMOUNT")])
    def test_start_day_rejected(self, value, code):
        assert coerce_pay_rule_start_day(value, "pay_rule_start_day").error.code == code


class TestCoerceStr:

    def test_strips(self):
        assert coerce_str("  Kim ").value == "Kim"

    def test_numbers_become_text(self):
        assert coerce_str(42).value == "42"

    def test_structures_rejected(self):
        assert coerce_str({"a": 1}).error.code == "INVALID_STRING"
