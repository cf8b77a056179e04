from lending.models.loan import Loan
from lending.extensions import db
from lending.repositories.member_repo import MSSQL_ROW_LOCK


class LoanRepo:
    @staticmethod
    def get(loan_id: int):
        return db.session.get(Loan, loan_id)

    @staticmethod
    def lock_query(loan_id: int):
        return (
            Loan.query
            .with_hint(Loan, MSSQL_ROW_LOCK, "mssql")
            .with_for_update()
            .populate_existing()
            .filter(Loan.id == loan_id)
        )

    @staticmethod
    def get_for_update(loan_id: int):
        return LoanRepo.lock_query(loan_id).first()

    @staticmethod
    def close_if_open(loan_id: int, return_date) -> int:
        """Sets return_date only while the loan is still open; returns rows updated (0 or 1)."""
        return Loan.query.filter(
            Loan.id == loan_id,
            Loan.return_date.is_(None)
        ).update({"return_date": return_date}, synchronize_session="fetch")

    @staticmethod
    def count_open_by_member(member_id: int) -> int:
        return Loan.query.filter(
            Loan.member_id == member_id,
            Loan.return_date.is_(None)
        ).count()

    @staticmethod
    def open_loan_for_copy(copy_id: int):
        return Loan.query.filter(
            Loan.copy_id == copy_id,
            Loan.return_date.is_(None)
        ).first()

    @staticmethod
    def create(loan: Loan):
        db.session.add(loan)
        db.session.flush()
        return loan
