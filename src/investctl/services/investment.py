"""InvestmentService — create, look up, list, delete, apply, and withdraw.

Each operation is a single read-check-write sequence against the
repository: VALIDATE → APPLY → PERSIST → RESPOND.  Failures come back
as ``ServiceResult(ok=False)`` with an :class:`ErrorCode`; nothing is
retried and the repository is left untouched when a check fails.
"""

from __future__ import annotations

import logging
from datetime import date

from pydantic import ValidationError

from investctl.domain.errors import ErrorCode
from investctl.domain.investment import (
    Investment,
    InvestmentCreate,
    apply_amount,
    can_withdraw,
    has_valid_term,
    to_model,
    to_payload,
    withdraw_amount,
)
from investctl.services.base import BaseService
from investctl.services.contracts import (
    BalanceChangeData,
    DeleteResultData,
    InvestmentItem,
    ListInvestmentsResultData,
    dump_validated,
)
from investctl.services.result import ServiceResult
from investctl.services.telemetry import step, traced

logger = logging.getLogger(__name__)


class InvestmentService(BaseService):
    """Business rules for investment records."""

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @traced("create_investment")
    def create_investment(
        self,
        name: str,
        *,
        value: float,
        initial_date: date,
        expiration_date: date,
        investment_id: int | None = None,
    ) -> ServiceResult:
        """Register a new investment.

        The name must be unused, an explicit *investment_id* must not
        belong to another record, and the initial date must fall strictly
        before the expiration date.  Uniqueness is checked first.
        """
        op = "create_investment"

        try:
            request = InvestmentCreate(
                id=investment_id,
                name=name,
                value=value,
                initial_date=initial_date,
                expiration_date=expiration_date,
            )
        except ValidationError as exc:
            messages = [f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()]
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "; ".join(messages))

        with step("check_unique_name", name=request.name):
            existing = self._repository.find_by_name(request.name)
        if existing is not None:
            logger.debug("Rejected duplicate investment name %r", request.name)
            return ServiceResult.failure(
                op,
                ErrorCode.ALREADY_REGISTERED,
                f"Investment already registered with name: {request.name}",
                name=request.name,
                existing_id=existing.id,
            )

        if request.id is not None:
            with step("check_unique_id"):
                holder = self._repository.find_by_id(request.id)
            if holder is not None:
                logger.debug("Rejected investment id %s held by %r", request.id, holder.name)
                return ServiceResult.failure(
                    op,
                    ErrorCode.ALREADY_REGISTERED,
                    f"Investment already registered with ID: {request.id}",
                    id=request.id,
                    existing_name=holder.name,
                )

        if not has_valid_term(request.initial_date, request.expiration_date):
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_EXPIRATION_DATE,
                (
                    f"Expiration date {request.expiration_date.isoformat()} must be after "
                    f"initial date {request.initial_date.isoformat()}"
                ),
                initial_date=request.initial_date.isoformat(),
                expiration_date=request.expiration_date.isoformat(),
            )

        with step("persist"):
            saved = self._repository.save(to_model(request))
        logger.info("Created investment %s (%s)", saved.id, saved.name)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(InvestmentItem, to_payload(saved)),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced("get")
    def find_by_name(self, name: str) -> ServiceResult:
        """Return the investment called *name*."""
        op = "get"
        with step("load", name=name):
            investment = self._repository.find_by_name(name)
        if investment is None:
            return ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"No investment found with name: {name}",
                name=name,
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(InvestmentItem, to_payload(investment)),
        )

    @traced("list_investments")
    def list_all(self) -> ServiceResult:
        """Return every stored investment (possibly none)."""
        with step("load_all"):
            items = [to_payload(inv) for inv in self._repository.find_all()]
        return ServiceResult(
            ok=True,
            op="list_investments",
            data=dump_validated(ListInvestmentsResultData, {"count": len(items), "items": items}),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced("delete")
    def delete_by_id(self, investment_id: int) -> ServiceResult:
        """Remove the investment with *investment_id*."""
        op = "delete"
        investment = self._load(investment_id)
        if investment is None:
            return _not_found(op, investment_id)

        with step("persist"):
            self._repository.delete_by_id(investment_id)
        logger.info("Deleted investment %s (%s)", investment_id, investment.name)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                DeleteResultData, {"id": investment_id, "name": investment.name}
            ),
        )

    @traced("apply")
    def apply(self, investment_id: int, amount: float) -> ServiceResult:
        """Deposit *amount* into the investment."""
        op = "apply"
        investment = self._load(investment_id)
        if investment is None:
            return _not_found(op, investment_id)

        with step("persist", amount=amount):
            saved = self._repository.save(apply_amount(investment, amount))
        logger.info("Applied %s to investment %s", amount, investment_id)

        return _balance_change(op, saved, amount=amount, previous_value=investment.value)

    @traced("withdraw")
    def withdraw(self, investment_id: int, amount: float) -> ServiceResult:
        """Withdraw *amount* from the investment, bounded by its current value."""
        op = "withdraw"
        investment = self._load(investment_id)
        if investment is None:
            return _not_found(op, investment_id)

        if not can_withdraw(investment, amount):
            logger.debug(
                "Rejected withdrawal of %s from investment %s (balance %s)",
                amount,
                investment_id,
                investment.value,
            )
            return ServiceResult.failure(
                op,
                ErrorCode.INSUFFICIENT_BALANCE,
                (
                    f"Insufficient balance for withdrawal: requested {amount}, "
                    f"available {investment.value}"
                ),
                id=investment_id,
                value=investment.value,
                amount=amount,
            )

        with step("persist", amount=amount):
            saved = self._repository.save(withdraw_amount(investment, amount))
        logger.info("Withdrew %s from investment %s", amount, investment_id)

        return _balance_change(op, saved, amount=amount, previous_value=investment.value)

    def _load(self, investment_id: int) -> Investment | None:
        with step("load"):
            return self._repository.find_by_id(investment_id)


def _not_found(op: str, investment_id: int) -> ServiceResult:
    return ServiceResult.failure(
        op,
        ErrorCode.NOT_FOUND,
        f"No investment found with ID: {investment_id}",
        id=investment_id,
    )


def _balance_change(
    op: str,
    investment: Investment,
    *,
    amount: float,
    previous_value: float,
) -> ServiceResult:
    payload = {**to_payload(investment), "amount": amount, "previous_value": previous_value}
    return ServiceResult(ok=True, op=op, data=dump_validated(BalanceChangeData, payload))
