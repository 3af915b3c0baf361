"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock
from debt_engine.domain.models import FinanceSummary, Loan
from debt_engine.services.debt_calculator import DebtCalculator


FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_loan(
    loan_id: str,
    balance: float,
    payment: float,
    rate: float,
    lender: str = "Bank",
    loan_type: str = "personal",
    principal: float | None = None,
    end_date: date | None = None,
) -> Loan:
    return Loan(
        id=loan_id,
        user_id="user1",
        lender=lender,
        type=loan_type,
        principal_amount=principal if principal is not None else balance,
        remaining_balance=balance,
        monthly_payment=payment,
        interest_rate=rate,
        end_date=end_date,
    )


def make_summary(monthly_income: float, monthly_loans: float, disposable_income: float = 0.0) -> FinanceSummary:
    return FinanceSummary(
        user_id="user1",
        monthly_income=monthly_income,
        monthly_loan_payments=monthly_loans,
        disposable_income=disposable_income,
        debt_to_income_ratio=monthly_loans / monthly_income if monthly_income else 0.0,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sample_loans() -> list[Loan]:
    """Three-loan portfolio: credit card, auto loan, personal loan"""
    return [
        make_loan("loan1", 4500.0, 200.0, 18.99, lender="Bank A", loan_type="credit_card", principal=5000.0),
        make_loan("loan2", 20000.0, 450.0, 6.5, lender="Bank B", loan_type="auto", principal=25000.0),
        make_loan("loan3", 8000.0, 300.0, 12.0, lender="Credit Union", principal=10000.0),
    ]


@pytest.fixture
def finance_service() -> AsyncMock:
    """Finance service double with no loans and an empty summary"""
    service = AsyncMock()
    service.get_user_loans.return_value = []
    service.calculate_finance_summary.return_value = FinanceSummary(user_id="user1")
    return service


@pytest.fixture
def calculator(finance_service: AsyncMock) -> DebtCalculator:
    return DebtCalculator(finance_service, clock=lambda: FIXED_NOW)
