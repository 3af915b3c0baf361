"""Debt calculator - fetches a user's loans and runs the payoff and analysis engine"""

import logging
import time
from datetime import datetime
from typing import Callable, List, Protocol

from debt_engine.domain.amortization import calculate_minimum_payment, calculate_payoff_months
from debt_engine.domain.analysis import analyze_debt
from debt_engine.domain.exceptions import UpstreamDataError
from debt_engine.domain.models import (
    STRATEGY_NO_DEBT,
    DebtAnalysis,
    FinanceSummary,
    InterestSavings,
    Loan,
    PaymentStrategy,
)
from debt_engine.domain.strategies import (
    calculate_avalanche_strategy,
    calculate_interest_savings,
    calculate_snowball_strategy,
    choose_strategy,
)
from debt_engine.infrastructure.observability.logging import log_analysis
from debt_engine.infrastructure.observability.metrics import (
    record_analysis,
    record_fetch_failure,
    record_strategy,
)
from debt_engine.utils.date_utils import add_months, utc_now, whole_months_until


# Debt-free projection used when loans carry a balance but no payoff horizon can be computed
DEFAULT_PROJECTION_MONTHS = 360


class FinanceService(Protocol):
    """Source of loan records and the monthly finance summary"""

    async def get_user_loans(self, user_id: str) -> List[Loan]:
        ...

    async def calculate_finance_summary(self, user_id: str) -> FinanceSummary:
        ...


class DebtCalculator:
    """
    Debt analysis entry point for a single user.

    Every call refetches loans from the finance service and recomputes from
    that snapshot; nothing is cached. Cancelling the awaiting task cancels
    the in-flight finance service call.
    """

    def __init__(self, finance_service: FinanceService, clock: Callable[[], datetime] = utc_now):
        self.finance_service = finance_service
        self.clock = clock

    async def _get_loans(self, user_id: str) -> List[Loan]:
        try:
            return list(await self.finance_service.get_user_loans(user_id))
        except Exception as e:
            record_fetch_failure("loans")
            logging.error(f"Finance service error: {e}", extra={"user_id": user_id, "operation": "loans"})
            raise UpstreamDataError(f"failed to get user loans: {e}") from e

    async def _get_summary(self, user_id: str) -> FinanceSummary:
        try:
            return await self.finance_service.calculate_finance_summary(user_id)
        except Exception as e:
            record_fetch_failure("summary")
            logging.error(f"Finance service error: {e}", extra={"user_id": user_id, "operation": "summary"})
            raise UpstreamDataError(f"failed to get financial summary: {e}") from e

    async def calculate_total_debt(self, user_id: str) -> float:
        """Sum of remaining balances across all loans"""
        loans = await self._get_loans(user_id)
        return sum(loan.remaining_balance for loan in loans)

    async def project_debt_free_date(self, user_id: str) -> datetime:
        """
        Date the last loan is paid off at current payments.

        Loans without a payment count down to their end date instead. With
        no loans the user is already debt-free and "now" is returned.
        """
        loans = await self._get_loans(user_id)
        now = self.clock()
        if not loans:
            return now

        max_months = 0
        for loan in loans:
            if loan.monthly_payment <= 0:
                if loan.end_date is not None:
                    max_months = max(max_months, whole_months_until(loan.end_date, now))
                continue
            months = calculate_payoff_months(loan.remaining_balance, loan.interest_rate, loan.monthly_payment)
            max_months = max(max_months, months)

        if max_months == 0 and any(loan.remaining_balance > 0 for loan in loans):
            max_months = DEFAULT_PROJECTION_MONTHS

        return add_months(now, max_months)

    async def suggest_payment_strategy(self, user_id: str, extra_payment: float) -> PaymentStrategy:
        """Simulate avalanche and snowball and recommend one of them"""
        start_time = time.time()
        loans = await self._get_loans(user_id)

        if not loans:
            record_strategy(STRATEGY_NO_DEBT)
            return PaymentStrategy(
                strategy_type=STRATEGY_NO_DEBT,
                user_id=user_id,
                extra_payment_amount=extra_payment,
                projected_debt_free_date=self.clock(),
                recommended_reason="You have no debt to pay off.",
            )

        summary = await self._get_summary(user_id)
        now = self.clock()

        avalanche = calculate_avalanche_strategy(loans, extra_payment, now)
        snowball = calculate_snowball_strategy(loans, extra_payment, now)
        strategy, reason = choose_strategy(avalanche, snowball, summary.debt_to_income_ratio)

        strategy.user_id = user_id
        strategy.extra_payment_amount = extra_payment
        strategy.recommended_reason = reason

        record_strategy(strategy.strategy_type)
        log_analysis(
            user_id,
            "suggest_payment_strategy",
            (time.time() - start_time) * 1000,
            strategy=strategy.strategy_type,
            loan_count=len(loans),
        )
        return strategy

    async def calculate_interest_savings(self, user_id: str, extra_payment: float) -> InterestSavings:
        """Savings from spreading an extra monthly payment across loans by balance"""
        loans = await self._get_loans(user_id)
        return calculate_interest_savings(loans, extra_payment, user_id=user_id, now=self.clock())

    async def get_debt_analysis(self, user_id: str) -> DebtAnalysis:
        """Portfolio statistics, health status, recommendations and per-loan projections"""
        start_time = time.time()
        loans = await self._get_loans(user_id)

        summary = None
        if loans:
            summary = await self._get_summary(user_id)

        analysis = analyze_debt(loans, summary, user_id=user_id, now=self.clock())

        record_analysis(analysis.debt_health_status)
        log_analysis(
            user_id,
            "debt_analysis",
            (time.time() - start_time) * 1000,
            health_status=analysis.debt_health_status,
            loan_count=len(loans),
            total_debt=analysis.total_debt,
        )
        return analysis

    @staticmethod
    def calculate_minimum_payment(principal: float, interest_rate: float, term_months: int) -> float:
        """Level monthly payment for a new loan; needs no finance data"""
        return calculate_minimum_payment(principal, interest_rate, term_months)
