"""Payoff strategy simulation - avalanche, snowball and proportional extra payments"""

import math
from datetime import datetime
from typing import Callable, List, Sequence, Tuple

from debt_engine.domain.amortization import (
    calculate_payoff_months,
    calculate_total_interest,
    is_never_payoff,
)
from debt_engine.domain.models import (
    STRATEGY_AVALANCHE,
    STRATEGY_SNOWBALL,
    InterestSavings,
    Loan,
    LoanPaymentPlan,
    PaymentStrategy,
)
from debt_engine.utils.date_utils import add_months, utc_now


# Above this debt-to-income ratio avalanche is recommended unconditionally
HIGH_DTI_THRESHOLD = 0.50
# Avalanche wins on savings when it beats snowball by more than either margin
INTEREST_DIFFERENCE_THRESHOLD = 500.0
MONTHS_DIFFERENCE_THRESHOLD = 6
# Suggested extra payment as a share of the total minimum payments
RECOMMENDED_EXTRA_RATIO = 0.125


def total_minimum_payments(loans: Sequence[Loan]) -> float:
    return sum(loan.monthly_payment for loan in loans)


def build_payment_plan(loan: Loan, payment: float, payoff_order: int, now: datetime) -> LoanPaymentPlan:
    """Project a single loan paid at a fixed monthly amount"""
    months = calculate_payoff_months(loan.remaining_balance, loan.interest_rate, payment)
    interest = calculate_total_interest(loan.remaining_balance, loan.interest_rate, payment)

    return LoanPaymentPlan(
        loan_id=loan.id,
        lender=loan.lender,
        current_balance=loan.remaining_balance,
        interest_rate=loan.interest_rate,
        minimum_payment=loan.monthly_payment,
        recommended_payment=payment,
        payoff_order=payoff_order,
        months_to_payoff=months,
        total_interest=interest,
        payoff_date=add_months(now, months),
        never_pays_off=is_never_payoff(months),
    )


def calculate_total_interest_and_time(loans: Sequence[Loan], extra_payment: float) -> Tuple[float, int]:
    """
    Total interest and months until the last loan is paid off.

    The extra payment is split across loans in proportion to their remaining
    balance. With extra_payment == 0 this is the minimum-payment baseline.
    """
    total_interest = 0.0
    max_months = 0
    total_balance = sum(loan.remaining_balance for loan in loans)

    for loan in loans:
        effective_payment = loan.monthly_payment
        if extra_payment > 0 and total_balance > 0:
            effective_payment += extra_payment * (loan.remaining_balance / total_balance)

        months = calculate_payoff_months(loan.remaining_balance, loan.interest_rate, effective_payment)
        total_interest += calculate_total_interest(loan.remaining_balance, loan.interest_rate, effective_payment)
        max_months = max(max_months, months)

    return total_interest, max_months


def _simulate_priority_strategy(
    strategy_type: str,
    loans: Sequence[Loan],
    sort_key: Callable[[Loan], float],
    reverse: bool,
    extra_payment: float,
    now: datetime | None,
) -> PaymentStrategy:
    """
    Put the whole extra payment on the first loan in priority order.

    Each loan is projected independently at its own payment. A paid-off
    loan's minimum does not roll into the next loan, so this understates
    the savings of a full cascading avalanche/snowball.
    """
    now = now or utc_now()
    # sorted() is stable: ties keep the order the finance service returned
    prioritized = sorted(loans, key=sort_key, reverse=reverse)

    plans: List[LoanPaymentPlan] = []
    total_interest = 0.0
    total_months = 0
    for index, loan in enumerate(prioritized):
        payment = loan.monthly_payment + (extra_payment if index == 0 else 0.0)
        plan = build_payment_plan(loan, payment, index + 1, now)
        plans.append(plan)
        total_interest += plan.total_interest
        total_months = max(total_months, plan.months_to_payoff)

    base_interest, base_months = calculate_total_interest_and_time(loans, 0)

    return PaymentStrategy(
        strategy_type=strategy_type,
        extra_payment_amount=extra_payment,
        prioritized_loans=plans,
        total_interest_saved=base_interest - total_interest,
        months_saved=base_months - total_months,
        monthly_payment_plan=total_minimum_payments(loans) + extra_payment,
        projected_debt_free_date=add_months(now, total_months),
    )


def calculate_avalanche_strategy(
    loans: Sequence[Loan], extra_payment: float, now: datetime | None = None
) -> PaymentStrategy:
    """Highest interest rate first"""
    return _simulate_priority_strategy(
        STRATEGY_AVALANCHE, loans, lambda loan: loan.interest_rate, True, extra_payment, now
    )


def calculate_snowball_strategy(
    loans: Sequence[Loan], extra_payment: float, now: datetime | None = None
) -> PaymentStrategy:
    """Smallest remaining balance first"""
    return _simulate_priority_strategy(
        STRATEGY_SNOWBALL, loans, lambda loan: loan.remaining_balance, False, extra_payment, now
    )


def choose_strategy(
    avalanche: PaymentStrategy, snowball: PaymentStrategy, debt_to_income_ratio: float
) -> Tuple[PaymentStrategy, str]:
    """
    Pick between the two simulated strategies.

    Rules (first match wins):
    - DTI above 50%: avalanche, interest reduction comes first
    - avalanche saves > $500 more interest or > 6 more months: avalanche
    - otherwise snowball, for momentum at a similar cost

    Returns: (chosen strategy, reason)
    """
    interest_difference = avalanche.total_interest_saved - snowball.total_interest_saved
    months_difference = avalanche.months_saved - snowball.months_saved

    if debt_to_income_ratio > HIGH_DTI_THRESHOLD:
        reason = (
            f"High debt-to-income ratio ({debt_to_income_ratio * 100:.1f}%): "
            "avalanche method minimizes interest while payments strain your income"
        )
        return avalanche, reason

    if interest_difference > INTEREST_DIFFERENCE_THRESHOLD or months_difference > MONTHS_DIFFERENCE_THRESHOLD:
        reason = (
            f"Avalanche method saves ${interest_difference:.2f} in interest "
            f"and {months_difference} months compared to snowball"
        )
        return avalanche, reason

    return snowball, "Snowball method provides psychological benefits with similar financial outcomes"


def calculate_interest_savings(
    loans: Sequence[Loan], extra_payment: float, user_id: str = "", now: datetime | None = None
) -> InterestSavings:
    """
    Compare the minimum-payment baseline with the extra payment spread by balance.

    Break-even is the number of months of extra payments whose sum equals
    the interest saved.
    """
    now = now or utc_now()

    current_interest, current_months = calculate_total_interest_and_time(loans, 0)
    new_interest, new_months = calculate_total_interest_and_time(loans, extra_payment)
    interest_saved = current_interest - new_interest

    break_even_months = 0
    if extra_payment > 0:
        break_even_months = math.ceil(interest_saved / extra_payment)

    return InterestSavings(
        user_id=user_id,
        extra_payment_amount=extra_payment,
        current_total_interest=current_interest,
        new_total_interest=new_interest,
        interest_saved=interest_saved,
        months_saved=current_months - new_months,
        current_debt_free_date=add_months(now, current_months),
        new_debt_free_date=add_months(now, new_months),
        break_even_months=break_even_months,
        recommended_extra_payment=total_minimum_payments(loans) * RECOMMENDED_EXTRA_RATIO,
    )
