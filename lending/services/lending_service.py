from datetime import datetime

from flask import current_app

from lending.unit_of_work import unit_of_work
from lending.errors import (
    AlreadyReturned,
    BorrowLimitExceeded,
    CopyUnavailable,
    NotFound,
    ValidationError,
)
from lending.models.loan import Loan
from lending.repositories.catalog_repo import CatalogRepo
from lending.repositories.loan_repo import LoanRepo
from lending.repositories.member_repo import MemberRepo
from lending.services.fine_assessor import FineAssessor
from lending.utils.dates import parse_date

DEFAULT_BORROW_LIMIT = 5


class LendingService:
    @staticmethod
    def borrow_limit() -> int:
        return int(current_app.config.get("BORROW_LIMIT", DEFAULT_BORROW_LIMIT))

    @staticmethod
    def _check_limit(member_id: int, open_count: int, limit: int):
        if open_count > limit:
            current_app.logger.warning(
                f"[lending] member={member_id} borrow rejected: {open_count} open loans (limit {limit})"
            )
            raise BorrowLimitExceeded(f"Cannot borrow more than {limit} items at a time")

    @staticmethod
    def borrow(member_id: int, copy_id: int, borrow_date) -> int:
        """
        Opens a loan of `copy_id` for `member_id` and returns the loan id.

        The member row is locked, the open-loan count is checked before the
        insert and re-checked after it; exceeding the limit at either point
        rolls the whole unit of work back.
        """
        borrow_date = parse_date(borrow_date, "borrow date")
        limit = LendingService.borrow_limit()

        with unit_of_work():
            member = MemberRepo.get_for_update(member_id)
            if not member:
                raise NotFound(f"Member {member_id} not found")

            copy = CatalogRepo.get_copy(copy_id)
            if not copy:
                raise NotFound(f"Copy {copy_id} not found")

            if LoanRepo.open_loan_for_copy(copy_id) is not None:
                raise CopyUnavailable(f"Copy {copy_id} is already on loan")

            LendingService._check_limit(member_id, LoanRepo.count_open_by_member(member_id) + 1, limit)

            loan = LoanRepo.create(Loan(
                member_id=member_id,
                copy_id=copy_id,
                borrow_date=borrow_date,
                return_date=None,
            ))

            # post-insert recount; catches a concurrent borrow that slipped past the first check
            LendingService._check_limit(member_id, LoanRepo.count_open_by_member(member_id), limit)

            loan_id = loan.id

        current_app.logger.info(
            f"[lending] loan={loan_id} opened member={member_id} copy={copy_id} date={borrow_date}"
        )
        return loan_id

    @staticmethod
    def return_loan(loan_id: int, return_date, now: datetime = None) -> None:
        """
        Closes a loan and assesses its overdue fine in the same unit of work.

        `now` is the assessment clock stamped on any fine (defaults to utcnow).
        """
        return_date = parse_date(return_date, "return date")

        with unit_of_work():
            loan = LoanRepo.get_for_update(loan_id)
            if not loan:
                raise NotFound(f"Loan {loan_id} not found")

            if loan.return_date is not None:
                raise AlreadyReturned(f"Loan {loan_id} was already returned on {loan.return_date}")

            if return_date < loan.borrow_date:
                raise ValidationError(
                    f"Return date {return_date} is before borrow date {loan.borrow_date}"
                )

            # guarded close: a racing return that already committed leaves 0 rows to update
            if LoanRepo.close_if_open(loan_id, return_date) == 0:
                raise AlreadyReturned(f"Loan {loan_id} was already returned")

            fine = FineAssessor.assess(loan, now=now)
            fine_amount = fine.amount if fine else None

        current_app.logger.info(
            f"[lending] loan={loan_id} returned date={return_date} "
            f"fine={fine_amount}"
        )
