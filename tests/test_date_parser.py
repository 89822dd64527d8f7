"""Tests for date parsing utilities."""

import pytest
from datetime import date, datetime, timedelta

from bankdedupe.utils.date_parser import parse_date, parse_datetime


def test_parse_date_absolute():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_date_relative():
    assert parse_date("today") == date.today()
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_datetime_drops_timezone():
    assert parse_datetime("2019-06-01T10:30:00+02:00") == datetime(2019, 6, 1, 10, 30)


def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_date("not a date")
