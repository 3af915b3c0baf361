"""Finance API HTTP client for fetching loans and the monthly finance summary"""

import httpx
from datetime import date
from typing import Any, Dict, List
from debt_engine.domain.models import Loan, FinanceSummary
from debt_engine.domain.exceptions import FinanceServiceError
from debt_engine.config import settings


class FinanceClient:
    """Client for the external finance service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.finance_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get_json(self, path: str, user_id: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params={"user_id": user_id})
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise FinanceServiceError(f"Finance API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise FinanceServiceError(f"Finance API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise FinanceServiceError(f"Finance API unreachable: {e}") from e
            except ValueError as e:
                raise FinanceServiceError(f"Finance API returned invalid JSON: {e}") from e

    async def get_user_loans(self, user_id: str) -> List[Loan]:
        """
        Fetch the user's loans in the order the finance service stores them.

        Raises:
            FinanceServiceError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json("/finance/loans", user_id)
        try:
            return [
                Loan(
                    id=str(item["id"]),
                    user_id=item.get("user_id", user_id),
                    lender=item["lender"],
                    type=item["type"],
                    principal_amount=float(item["principal_amount"]),
                    remaining_balance=float(item["remaining_balance"]),
                    monthly_payment=float(item["monthly_payment"]),
                    interest_rate=float(item["interest_rate"]),
                    end_date=date.fromisoformat(item["end_date"]) if item.get("end_date") else None,
                )
                for item in data.get("loans", [])
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise FinanceServiceError(f"Invalid loan data from finance service: {e}") from e

    async def calculate_finance_summary(self, user_id: str) -> FinanceSummary:
        """
        Fetch the aggregated monthly finances for the user.

        Raises:
            FinanceServiceError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json("/finance/summary", user_id)
        try:
            return FinanceSummary(
                user_id=data.get("user_id", user_id),
                monthly_income=float(data["monthly_income"]),
                monthly_expenses=float(data.get("monthly_expenses", 0.0)),
                monthly_loan_payments=float(data.get("monthly_loan_payments", 0.0)),
                disposable_income=float(data["disposable_income"]),
                debt_to_income_ratio=float(data["debt_to_income_ratio"]),
                savings_rate=float(data.get("savings_rate", 0.0)),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise FinanceServiceError(f"Invalid finance summary from finance service: {e}") from e
