# lending/services/report_service.py
from __future__ import annotations

from sqlalchemy import case, exists, func, select

from lending.errors import NotFound, ValidationError
from lending.extensions import db
from lending.models.copy import Copy
from lending.models.fine import Fine
from lending.models.item import Item
from lending.models.item_type import ItemType
from lending.models.loan import Loan
from lending.models.member import Member
from lending.models.transaction import FineTransaction
from lending.repositories.member_repo import MemberRepo
from lending.services.fine_assessor import compute_due_date
from lending.services.fine_service import FineService, OUTSTANDING, PAID
from lending.utils.dates import parse_date


class ReportService:
    """
    Read-only projections. Every report is a single SELECT so it sees one
    snapshot: a closed loan and the fine its return produced are always
    visible together.
    """

    @staticmethod
    def _require_member(member_id: int):
        if not MemberRepo.get_by_id(member_id):
            raise NotFound(f"Member {member_id} not found")

    @staticmethod
    def _settled_clause():
        return exists().where(
            FineTransaction.fine_id == Fine.id,
            FineTransaction.type.in_(FineService.settling_types()),
        )

    @staticmethod
    def current_loans(member_id: int | None = None, roles=None) -> list[dict]:
        # summed per loan; fines normally arise on return, so open loans read 0
        fine_amount = (
            select(func.coalesce(func.sum(Fine.amount), 0))
            .where(Fine.loan_id == Loan.id)
            .scalar_subquery()
            .label("fine_amount")
        )
        q = (
            db.session.query(
                Loan.id, Loan.member_id, Member.name, Member.email, Member.role,
                Loan.copy_id, Item.title, Loan.borrow_date, ItemType.loan_period_days,
                fine_amount,
            )
            .join(Member, Member.id == Loan.member_id)
            .join(Copy, Copy.id == Loan.copy_id)
            .join(Item, Item.id == Copy.item_id)
            .join(ItemType, ItemType.id == Item.item_type_id)
            .filter(Loan.return_date.is_(None))
        )
        if member_id is not None:
            q = q.filter(Loan.member_id == member_id)
        if roles:
            q = q.filter(Member.role.in_(list(roles)))

        rows = q.order_by(Loan.borrow_date.asc(), Loan.id.asc()).all()
        return [
            {
                "loan_id": r.id,
                "member_id": r.member_id,
                "member_name": r.name,
                "member_email": r.email,
                "role": r.role,
                "copy_id": r.copy_id,
                "title": r.title,
                "borrow_date": r.borrow_date,
                "due_date": compute_due_date(r.borrow_date, r.loan_period_days),
                "fine_amount": r.fine_amount,
            }
            for r in rows
        ]

    @staticmethod
    def loan_history(member_id: int, start_date, end_date) -> list[dict]:
        start_date = parse_date(start_date, "start date")
        end_date = parse_date(end_date, "end date")
        if start_date > end_date:
            raise ValidationError(f"start date {start_date} is after end date {end_date}")
        ReportService._require_member(member_id)

        rows = (
            db.session.query(Loan.id, Loan.copy_id, Item.title, Loan.borrow_date, Loan.return_date)
            .join(Copy, Copy.id == Loan.copy_id)
            .join(Item, Item.id == Copy.item_id)
            .filter(
                Loan.member_id == member_id,
                Loan.borrow_date.between(start_date, end_date),
            )
            .order_by(Loan.borrow_date.asc(), Loan.id.asc())
            .all()
        )
        return [
            {
                "loan_id": r.id,
                "copy_id": r.copy_id,
                "title": r.title,
                "borrow_date": r.borrow_date,
                "return_date": r.return_date,
            }
            for r in rows
        ]

    @staticmethod
    def _fines_query(member_id: int):
        return (
            db.session.query(
                Fine.id, Fine.loan_id, Item.title, Loan.borrow_date, Fine.amount, Fine.fine_date,
            )
            .join(Loan, Loan.id == Fine.loan_id)
            .join(Copy, Copy.id == Loan.copy_id)
            .join(Item, Item.id == Copy.item_id)
            .filter(Loan.member_id == member_id)
        )

    @staticmethod
    def outstanding_fines(member_id: int) -> list[dict]:
        ReportService._require_member(member_id)

        rows = (
            ReportService._fines_query(member_id)
            .filter(~ReportService._settled_clause())
            .order_by(Fine.fine_date.asc(), Fine.id.asc())
            .all()
        )
        return [
            {
                "fine_id": r.id,
                "loan_id": r.loan_id,
                "title": r.title,
                "borrow_date": r.borrow_date,
                "amount": r.amount,
                "fine_date": r.fine_date,
                "status": OUTSTANDING,
            }
            for r in rows
        ]

    @staticmethod
    def member_fines(member_id: int) -> list[dict]:
        """All fines of a member, each marked Paid or Outstanding."""
        ReportService._require_member(member_id)

        status = case((ReportService._settled_clause(), PAID), else_=OUTSTANDING)
        rows = (
            ReportService._fines_query(member_id)
            .add_columns(status.label("status"))
            .order_by(Fine.fine_date.asc(), Fine.id.asc())
            .all()
        )
        return [
            {
                "fine_id": r.id,
                "loan_id": r.loan_id,
                "title": r.title,
                "borrow_date": r.borrow_date,
                "amount": r.amount,
                "fine_date": r.fine_date,
                "status": r.status,
            }
            for r in rows
        ]
