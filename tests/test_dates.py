from datetime import datetime, timedelta, timezone

import pytest

from libraryhub.models.borrowing import Borrowing
from libraryhub.utils.dates import parse_timestamp, to_iso
from tests.fakes import NOW


def test_z_suffix_is_utc():
    assert parse_timestamp("2026-03-10T12:00:00Z") == NOW


def test_naive_value_is_taken_as_utc():
    parsed = parse_timestamp("2026-03-10T12:00:00")
    assert parsed == NOW
    assert parsed.tzinfo is not None


def test_offset_is_converted_to_utc():
    assert parse_timestamp("2026-03-10T14:00:00+02:00") == NOW


@pytest.mark.parametrize(
    "text, micros",
    [
        ("2026-03-10T12:00:00.1+00:00", 100000),
        ("2026-03-10T12:00:00.12345+00:00", 123450),
        ("2026-03-10T12:00:00.1234567Z", 123456),
        ("2026-03-10T12:00:00.12345", 123450),
    ],
)
def test_trimmed_fractional_seconds(text, micros):
    assert parse_timestamp(text) == NOW + timedelta(microseconds=micros)


def test_empty_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_datetime_passes_through_as_utc():
    local = datetime(2026, 3, 10, 7, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert parse_timestamp(local) == NOW
    assert parse_timestamp(to_iso(NOW)) == NOW


def test_borrowing_row_with_five_digit_fraction():
    loan = Borrowing.from_row({
        "id": "l1",
        "user_id": "user-1",
        "book_id": "b1",
        "borrowed_at": "2026-02-24T12:00:00.12345+00:00",
        "due_date": "2026-03-10T12:00:00.5+00:00",
        "status": "borrowed",
        "returned_at": None,
    })
    assert loan.due_date == NOW + timedelta(microseconds=500000)
    assert loan.is_overdue(NOW) is False
