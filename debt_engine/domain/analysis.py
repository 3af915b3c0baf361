"""Debt portfolio analysis - weighted rates, extremes, health status and recommendations"""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from debt_engine.domain.models import (
    HEALTH_EXCELLENT,
    HEALTH_FAIR,
    HEALTH_GOOD,
    HEALTH_POOR,
    DebtAnalysis,
    FinanceSummary,
    Loan,
    LoanPaymentPlan,
    LoanSummary,
)
from debt_engine.domain.strategies import (
    build_payment_plan,
    calculate_total_interest_and_time,
    total_minimum_payments,
)
from debt_engine.utils.date_utils import utc_now


NO_DEBT_RECOMMENDATION = "Great job! You have no debt."


def weighted_average_rate(loans: Sequence[Loan]) -> float:
    """Interest rate averaged by remaining balance (0 when nothing is owed)"""
    total_balance = sum(loan.remaining_balance for loan in loans)
    if total_balance <= 0:
        return 0.0
    return sum(loan.interest_rate * loan.remaining_balance for loan in loans) / total_balance


def find_extremes(loans: Sequence[Loan]) -> Tuple[LoanSummary, LoanSummary, LoanSummary, LoanSummary]:
    """
    Single pass for highest/lowest rate and largest/smallest balance.

    Comparisons are strict, so the first loan in input order wins a tie.

    Returns: (highest_rate, lowest_rate, largest_balance, smallest_balance)
    """
    if not loans:
        return LoanSummary(), LoanSummary(), LoanSummary(), LoanSummary()

    highest = lowest = largest = smallest = loans[0]
    for loan in loans[1:]:
        if loan.interest_rate > highest.interest_rate:
            highest = loan
        if loan.interest_rate < lowest.interest_rate:
            lowest = loan
        if loan.remaining_balance > largest.remaining_balance:
            largest = loan
        if loan.remaining_balance < smallest.remaining_balance:
            smallest = loan

    return (
        LoanSummary.from_loan(highest),
        LoanSummary.from_loan(lowest),
        LoanSummary.from_loan(largest),
        LoanSummary.from_loan(smallest),
    )


def classify_debt_health(
    debt_to_income_ratio: float, average_rate: float, total_debt: float, monthly_income: float
) -> str:
    """
    Map portfolio metrics to a health bucket (first matching rule wins).

    - Poor:  DTI > 50%, average rate > 20%, or debt > 10x monthly income
    - Fair:  DTI > 36% or average rate > 10%
    - Good:  DTI > 20% or average rate > 6%
    - Excellent otherwise
    """
    if debt_to_income_ratio > 0.50 or average_rate > 20.0:
        return HEALTH_POOR
    if monthly_income > 0 and total_debt > monthly_income * 10:
        return HEALTH_POOR

    if debt_to_income_ratio > 0.36 or average_rate > 10.0:
        return HEALTH_FAIR

    if debt_to_income_ratio > 0.20 or average_rate > 6.0:
        return HEALTH_GOOD

    return HEALTH_EXCELLENT


def generate_recommendations(
    health_status: str,
    debt_to_income_ratio: float,
    average_rate: float,
    loans: Sequence[Loan],
    summary: FinanceSummary,
) -> List[str]:
    recommendations: List[str] = []

    if health_status == HEALTH_POOR:
        recommendations.append("Your debt levels are concerning. Immediate action required.")
        if debt_to_income_ratio > 0.50:
            recommendations.append(
                "Your debt-to-income ratio exceeds 50%. Focus on debt reduction before new purchases."
            )
        if average_rate > 15.0:
            recommendations.append("Consider debt consolidation to reduce high interest rates.")
        recommendations.append("Avoid taking on any new debt.")
        recommendations.append("Consider credit counseling services.")
    elif health_status == HEALTH_FAIR:
        recommendations.append("Your debt is manageable but needs attention.")
        if debt_to_income_ratio > 0.36:
            recommendations.append("Work to reduce debt-to-income ratio below 36%.")
        recommendations.append("Make extra payments when possible to reduce interest.")
        recommendations.append("Avoid new debt until current debt is reduced.")
    elif health_status == HEALTH_GOOD:
        recommendations.append("Your debt levels are reasonable.")
        recommendations.append("Consider making extra payments to save on interest.")
        recommendations.append("Maintain current payment discipline.")
    else:
        recommendations.append("Excellent debt management!")
        recommendations.append("Consider using surplus for investments after maintaining emergency fund.")

    # Ordering advice only makes sense with more than one loan
    if len(loans) > 1:
        highest_rate = max(0.0, max(loan.interest_rate for loan in loans))
        if highest_rate > average_rate * 1.5:
            recommendations.append(
                "Focus extra payments on highest interest rate debt first (avalanche method)."
            )
        else:
            recommendations.append(
                "Consider snowball method to build momentum by paying smallest balances first."
            )

    if summary.disposable_income > 100:
        extra_payment = summary.disposable_income * 0.5
        recommendations.append(
            f"Consider making an extra ${extra_payment:.2f} monthly payment to accelerate debt payoff."
        )

    return recommendations


def build_payoff_projections(loans: Sequence[Loan], now: datetime) -> List[LoanPaymentPlan]:
    """Per-loan projections at the current minimum payment, in input order"""
    return [
        build_payment_plan(loan, loan.monthly_payment, index + 1, now)
        for index, loan in enumerate(loans)
    ]


def analyze_debt(
    loans: Sequence[Loan],
    summary: Optional[FinanceSummary],
    user_id: str = "",
    now: datetime | None = None,
) -> DebtAnalysis:
    """
    Build the full portfolio analysis.

    An empty portfolio is a success: Excellent health, zeroed figures and a
    single congratulatory recommendation. The summary is only read when
    there are loans.
    """
    if not loans:
        return DebtAnalysis(
            user_id=user_id,
            debt_health_status=HEALTH_EXCELLENT,
            recommendations=[NO_DEBT_RECOMMENDATION],
        )

    if summary is None:
        summary = FinanceSummary(user_id=user_id)
    now = now or utc_now()

    total_debt = sum(loan.remaining_balance for loan in loans)
    average_rate = weighted_average_rate(loans)
    highest, lowest, largest, smallest = find_extremes(loans)
    dti = summary.debt_to_income_ratio

    total_interest, total_months = calculate_total_interest_and_time(loans, 0)
    projections = build_payoff_projections(loans, now)

    health_status = classify_debt_health(dti, average_rate, total_debt, summary.monthly_income)

    return DebtAnalysis(
        user_id=user_id,
        total_debt=total_debt,
        total_monthly_payments=total_minimum_payments(loans),
        weighted_average_rate=average_rate,
        highest_rate_loan=highest,
        lowest_rate_loan=lowest,
        largest_balance_loan=largest,
        smallest_balance_loan=smallest,
        debt_to_income_ratio=dti * 100,
        months_to_payoff=total_months,
        total_interest_remaining=total_interest,
        debt_health_status=health_status,
        recommendations=generate_recommendations(health_status, dti, average_rate, loans, summary),
        payoff_projections=projections,
        non_amortizing_loans=[plan.loan_id for plan in projections if plan.never_pays_off],
        high_interest_loans=[loan.id for loan in loans if loan.is_high_interest_rate()],
    )
