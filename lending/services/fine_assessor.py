# lending/services/fine_assessor.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

from flask import current_app

from lending.errors import NotFound, ValidationError
from lending.models.fine import Fine
from lending.models.loan import Loan
from lending.repositories.catalog_repo import CatalogRepo
from lending.repositories.fine_repo import FineRepo

DEFAULT_DAILY_RATE = Decimal("1.00")
CENTS = Decimal("0.01")


def compute_due_date(borrow_date: date, loan_period_days: int) -> date:
    if loan_period_days is None or loan_period_days <= 0:
        raise ValidationError(f"loan period must be positive, got {loan_period_days!r}")
    return borrow_date + timedelta(days=loan_period_days)


def compute_overdue_days(borrow_date: date, return_date: date, loan_period_days: int) -> int:
    due_date = compute_due_date(borrow_date, loan_period_days)
    return max(0, (return_date - due_date).days)


def compute_fine_amount(overdue_days: int, daily_rate: Decimal = DEFAULT_DAILY_RATE) -> Decimal:
    if overdue_days <= 0:
        return Decimal("0.00")
    return (Decimal(daily_rate) * Decimal(overdue_days)).quantize(CENTS)


class FineAssessor:
    @staticmethod
    def _daily_rate() -> Decimal:
        return Decimal(str(current_app.config.get("FINE_DAILY_RATE", DEFAULT_DAILY_RATE)))

    @staticmethod
    def assess(loan: Loan, now: datetime | None = None) -> Fine | None:
        """
        Called once, right after `loan.return_date` is set, inside the Return
        unit of work. Creates at most one Fine; raising aborts the Return.

        fine_date is the assessment clock (`now`), not the return date.
        """
        if loan.return_date is None:
            raise ValidationError(f"Loan {loan.id} is still open")

        loan_period = CatalogRepo.loan_period_for_copy(loan.copy_id)
        if loan_period is None:
            raise NotFound(f"No item type / loan period for copy {loan.copy_id}")

        overdue_days = compute_overdue_days(loan.borrow_date, loan.return_date, loan_period)
        if overdue_days <= 0:
            return None

        fine = Fine(
            loan_id=loan.id,
            amount=compute_fine_amount(overdue_days, FineAssessor._daily_rate()),
            fine_date=now or datetime.utcnow(),
        )
        FineRepo.create(fine)

        current_app.logger.info(
            f"[fines] loan={loan.id} overdue_days={overdue_days} amount={fine.amount}"
        )
        return fine
