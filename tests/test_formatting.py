"""
Unit tests for utils/formatting.py

Tests all public functions: format_amount, format_percent, round_half_up,
format_delta, format_cell, summary_headers.
No file or network I/O required.
"""
import pytest

from utils.formatting import (
    ARROW_DOWN,
    ARROW_UP,
    PLACEHOLDER,
    format_amount,
    format_cell,
    format_delta,
    format_percent,
    round_half_up,
    summary_headers,
)


# ── format_amount ─────────────────────────────────────────────────────────────

def test_format_amount_none():
    assert format_amount(None) == ""


def test_format_amount_nan():
    assert format_amount(float("nan")) == ""


def test_format_amount_zero():
    assert format_amount(0) == "0"


def test_format_amount_thousands_use_dots():
    assert format_amount(1234567) == "1.234.567"


def test_format_amount_decimal_comma():
    assert format_amount(1234.5) == "1.234,5"


def test_format_amount_rounds_to_three_decimals():
    assert format_amount(1234.5678) == "1.234,568"
    assert format_amount(0.1 + 0.2) == "0,3"


def test_format_amount_negative_in_parentheses():
    assert format_amount(-1234.5) == "(1.234,5)"


def test_format_amount_with_currency():
    assert format_amount(12, "bn VND") == "12 bn VND"
    assert format_amount(-12, "bn VND") == "(12 bn VND)"


def test_format_amount_max_decimals():
    assert format_amount(1.23456, max_decimals=1) == "1,2"


# ── format_percent ────────────────────────────────────────────────────────────

def test_format_percent():
    assert format_percent(42.5) == "42.5%"
    assert format_percent(-3.14159, precision=2) == "-3.14%"


def test_format_percent_none():
    assert format_percent(None) == PLACEHOLDER


# ── round_half_up ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value,expected", [(2.5, 3), (2.4999, 2), (0.5, 1), (0, 0), (49.5, 50)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


# ── format_delta ──────────────────────────────────────────────────────────────

def test_format_delta_decrease():
    assert format_delta(-50, 100) == f"50 (50%) {ARROW_DOWN}"


def test_format_delta_increase():
    assert format_delta(25, 125) == f"25 (20%) {ARROW_UP}"


def test_format_delta_no_change():
    assert format_delta(0, 100) == "0 (0%)"


def test_format_delta_zero_prior_has_no_percentage():
    assert format_delta(25, 0) == f"25 {ARROW_UP}"


def test_format_delta_absent():
    assert format_delta(None, 100) == PLACEHOLDER


# ── format_cell ───────────────────────────────────────────────────────────────

def test_format_cell():
    assert format_cell(None) == PLACEHOLDER
    assert format_cell(0.0) == "0"
    assert format_cell(41300, "bn VND") == "41.300 bn VND"


# ── summary_headers ───────────────────────────────────────────────────────────

def test_summary_headers_quarterly():
    assert summary_headers(False) == ("Last quarter", "This quarter")
    assert summary_headers(False, "Q2") == ("Last quarter", "This quarter")


def test_summary_headers_annual_provisional():
    assert summary_headers(True, "Q2") == ("Last year (Q2)", "This year (Q2)")


def test_summary_headers_annual_final():
    assert summary_headers(True) == ("Last year", "This year")
