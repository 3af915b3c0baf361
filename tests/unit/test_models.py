"""Unit tests for loan helpers and date utilities"""

from datetime import date, datetime, timezone
from debt_engine.utils.date_utils import add_months, whole_months_until
from tests.conftest import make_loan


def test_loan_progress_percent():
    loan = make_loan("a", 7500.0, 200.0, 6.0, principal=10000.0)
    assert loan.progress_percent() == 25.0
    assert make_loan("b", 100.0, 10.0, 5.0, principal=0.0).progress_percent() == 0.0


def test_loan_type_display_name():
    assert make_loan("a", 1.0, 1.0, 1.0, loan_type="mortgage").type_display_name() == "Mortgage"
    assert make_loan("a", 1.0, 1.0, 1.0, loan_type="student").type_display_name() == "Student Loan"
    assert make_loan("a", 1.0, 1.0, 1.0, loan_type="credit_card").type_display_name() == "Other"


def test_loan_high_interest_thresholds_by_type():
    assert make_loan("a", 1.0, 1.0, 6.5, loan_type="mortgage").is_high_interest_rate()
    assert not make_loan("a", 1.0, 1.0, 6.5, loan_type="auto").is_high_interest_rate()
    assert make_loan("a", 1.0, 1.0, 7.5, loan_type="student").is_high_interest_rate()
    # unknown types use the personal loan threshold of 15%
    assert not make_loan("a", 1.0, 1.0, 14.0, loan_type="credit_card").is_high_interest_rate()
    assert make_loan("a", 1.0, 1.0, 16.0, loan_type="credit_card").is_high_interest_rate()


def test_add_months_rolls_over_year():
    start = datetime(2026, 11, 15, tzinfo=timezone.utc)
    assert add_months(start, 3) == datetime(2027, 2, 15, tzinfo=timezone.utc)
    assert add_months(start, 0) == start


def test_add_months_clamps_to_month_end():
    start = datetime(2026, 1, 31, 9, 30, tzinfo=timezone.utc)
    assert add_months(start, 1) == datetime(2026, 2, 28, 9, 30, tzinfo=timezone.utc)
    assert add_months(start, 37) == datetime(2029, 2, 28, 9, 30, tzinfo=timezone.utc)


def test_whole_months_until():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert whole_months_until(date(2026, 3, 2), now) == 2
    assert whole_months_until(date(2025, 12, 1), now) == 0
