"""Loan amortization primitives - closed-form payment, payoff and interest math"""

import math


# Returned by calculate_payoff_months when the payment never covers the interest
NEVER_PAYOFF_MONTHS = 999


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate (e.g. 12.0) to a monthly decimal rate"""
    return annual_rate_percent / 12 / 100


def is_never_payoff(months: int) -> bool:
    return months == NEVER_PAYOFF_MONTHS


def calculate_minimum_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Level monthly payment that retires the principal over term_months.

    PMT = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Non-positive principal or term yields 0; a zero rate divides the
    principal evenly over the term.
    """
    if principal <= 0 or term_months <= 0:
        return 0.0

    rate = monthly_rate(annual_rate_percent)
    if rate <= 0:
        return principal / term_months

    factor = (1 + rate) ** term_months
    return principal * rate * factor / (factor - 1)


def calculate_payoff_months(balance: float, annual_rate_percent: float, payment: float) -> int:
    """
    Months of fixed payments needed to clear balance, rounded up.

    n = -ln(1 - B * r / PMT) / ln(1 + r)

    Returns NEVER_PAYOFF_MONTHS when the payment does not exceed the first
    month's interest, and 0 for non-positive balance or payment.
    """
    if payment <= 0 or balance <= 0:
        return 0

    rate = monthly_rate(annual_rate_percent)
    if rate <= 0:
        return math.ceil(balance / payment)

    if payment <= balance * rate:
        return NEVER_PAYOFF_MONTHS

    months = -math.log(1 - balance * rate / payment) / math.log(1 + rate)
    return math.ceil(months)


def calculate_total_interest(balance: float, annual_rate_percent: float, payment: float) -> float:
    """Interest paid until payoff: months * payment - balance"""
    if payment <= 0 or balance <= 0:
        return 0.0

    months = calculate_payoff_months(balance, annual_rate_percent, payment)
    return months * payment - balance
