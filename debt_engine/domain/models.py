"""Domain models - pure Python dataclasses for loans and derived debt figures"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


LOAN_TYPE_MORTGAGE = "mortgage"
LOAN_TYPE_AUTO = "auto"
LOAN_TYPE_PERSONAL = "personal"
LOAN_TYPE_STUDENT = "student"

# Rate (%) above which a loan of the given type counts as high interest
HIGH_INTEREST_THRESHOLDS = {
    LOAN_TYPE_MORTGAGE: 6.0,
    LOAN_TYPE_AUTO: 8.0,
    LOAN_TYPE_PERSONAL: 15.0,
    LOAN_TYPE_STUDENT: 7.0,
}

LOAN_TYPE_DISPLAY_NAMES = {
    LOAN_TYPE_MORTGAGE: "Mortgage",
    LOAN_TYPE_AUTO: "Auto Loan",
    LOAN_TYPE_PERSONAL: "Personal Loan",
    LOAN_TYPE_STUDENT: "Student Loan",
}

STRATEGY_AVALANCHE = "Avalanche"
STRATEGY_SNOWBALL = "Snowball"
STRATEGY_NO_DEBT = "NoDebt"

HEALTH_EXCELLENT = "Excellent"
HEALTH_GOOD = "Good"
HEALTH_FAIR = "Fair"
HEALTH_POOR = "Poor"


@dataclass(frozen=True)
class Loan:
    """Loan record supplied by the finance service (never mutated here)"""

    id: str
    lender: str
    type: str
    principal_amount: float
    remaining_balance: float
    monthly_payment: float
    interest_rate: float  # annual, in percent
    end_date: Optional[date] = None
    user_id: str = ""

    def progress_percent(self) -> float:
        """Share of the original principal already repaid, in percent"""
        if self.principal_amount <= 0:
            return 0.0
        paid = self.principal_amount - self.remaining_balance
        return paid / self.principal_amount * 100.0

    def type_display_name(self) -> str:
        return LOAN_TYPE_DISPLAY_NAMES.get(self.type, "Other")

    def is_high_interest_rate(self) -> bool:
        # Unknown types fall back to the personal loan threshold
        threshold = HIGH_INTEREST_THRESHOLDS.get(
            self.type, HIGH_INTEREST_THRESHOLDS[LOAN_TYPE_PERSONAL]
        )
        return self.interest_rate > threshold


@dataclass(frozen=True)
class FinanceSummary:
    """Aggregated monthly finances for a user"""

    user_id: str
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    monthly_loan_payments: float = 0.0
    disposable_income: float = 0.0
    debt_to_income_ratio: float = 0.0  # fraction, 0.36 == 36%
    savings_rate: float = 0.0


@dataclass
class LoanSummary:
    """Compact view of a loan used for the portfolio extremes"""

    id: str = ""
    lender: str = ""
    type: str = ""
    remaining_balance: float = 0.0
    interest_rate: float = 0.0
    monthly_payment: float = 0.0
    type_display_name: str = ""
    progress_percent: float = 0.0

    @classmethod
    def from_loan(cls, loan: Loan) -> "LoanSummary":
        return cls(
            id=loan.id,
            lender=loan.lender,
            type=loan.type,
            remaining_balance=loan.remaining_balance,
            interest_rate=loan.interest_rate,
            monthly_payment=loan.monthly_payment,
            type_display_name=loan.type_display_name(),
            progress_percent=loan.progress_percent(),
        )


@dataclass
class LoanPaymentPlan:
    """Projected payoff of one loan under a given payment"""

    loan_id: str
    lender: str
    current_balance: float
    interest_rate: float
    minimum_payment: float
    recommended_payment: float
    payoff_order: int  # 1-based
    months_to_payoff: int
    total_interest: float
    payoff_date: datetime
    never_pays_off: bool = False


@dataclass
class PaymentStrategy:
    """Avalanche or snowball plan compared against the minimum-payment baseline"""

    strategy_type: str
    user_id: str = ""
    extra_payment_amount: float = 0.0
    prioritized_loans: List[LoanPaymentPlan] = field(default_factory=list)
    total_interest_saved: float = 0.0
    months_saved: int = 0
    monthly_payment_plan: float = 0.0
    projected_debt_free_date: Optional[datetime] = None
    recommended_reason: str = ""


@dataclass
class InterestSavings:
    """Effect of spreading an extra payment across all loans by balance"""

    user_id: str
    extra_payment_amount: float
    current_total_interest: float
    new_total_interest: float
    interest_saved: float
    months_saved: int
    current_debt_free_date: datetime
    new_debt_free_date: datetime
    break_even_months: int
    recommended_extra_payment: float


@dataclass
class DebtAnalysis:
    """Portfolio-wide debt picture"""

    user_id: str
    total_debt: float = 0.0
    total_monthly_payments: float = 0.0
    weighted_average_rate: float = 0.0
    highest_rate_loan: LoanSummary = field(default_factory=LoanSummary)
    lowest_rate_loan: LoanSummary = field(default_factory=LoanSummary)
    largest_balance_loan: LoanSummary = field(default_factory=LoanSummary)
    smallest_balance_loan: LoanSummary = field(default_factory=LoanSummary)
    debt_to_income_ratio: float = 0.0  # percent
    months_to_payoff: int = 0
    total_interest_remaining: float = 0.0
    debt_health_status: str = HEALTH_EXCELLENT
    recommendations: List[str] = field(default_factory=list)
    payoff_projections: List[LoanPaymentPlan] = field(default_factory=list)
    non_amortizing_loans: List[str] = field(default_factory=list)
    high_interest_loans: List[str] = field(default_factory=list)
