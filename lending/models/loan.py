from lending.extensions import db


class Loan(db.Model):
    __tablename__ = "loans"

    id = db.Column(db.Integer, primary_key=True)

    member_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=False, index=True)
    copy_id = db.Column(db.Integer, db.ForeignKey("copies.id"), nullable=False, index=True)

    borrow_date = db.Column(db.Date, nullable=False)
    return_date = db.Column(db.Date, nullable=True, index=True)  # NULL => open

    member = db.relationship("Member", backref="loans")
    copy = db.relationship("Copy", backref="loans")

    @property
    def is_open(self) -> bool:
        return self.return_date is None


# At most one open loan per copy. SQL Server gets the filtered equivalent
# from db_objects_mssql.
db.Index(
    "ux_loans_open_copy",
    Loan.copy_id,
    unique=True,
    sqlite_where=Loan.return_date.is_(None),
    postgresql_where=Loan.return_date.is_(None),
).ddl_if(dialect=("sqlite", "postgresql"))
