from lending.models.member import Member
from lending.extensions import db

# SQL Server ignores FOR UPDATE; it takes the row lock through a table hint,
# the same UPDLOCK/ROWLOCK pair the old sp_borrow_book used.
MSSQL_ROW_LOCK = "WITH (UPDLOCK, ROWLOCK)"


class MemberRepo:
    @staticmethod
    def get_by_email(email: str):
        return Member.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(member_id: int):
        return db.session.get(Member, member_id)

    @staticmethod
    def lock_query(member_id: int):
        return (
            Member.query
            .with_hint(Member, MSSQL_ROW_LOCK, "mssql")
            .with_for_update()
            .populate_existing()
            .filter(Member.id == member_id)
        )

    @staticmethod
    def get_for_update(member_id: int):
        # Row lock serializes borrows of the same member (no-op on SQLite,
        # which serializes writers itself).
        return MemberRepo.lock_query(member_id).first()

    @staticmethod
    def create(member: Member):
        db.session.add(member)
        db.session.flush()
        return member
