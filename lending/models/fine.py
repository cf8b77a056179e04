from datetime import datetime
from lending.extensions import db


class Fine(db.Model):
    __tablename__ = "fines"
    __table_args__ = (
        db.CheckConstraint("amount >= 0", name="ck_fines_amount_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)

    loan_id = db.Column(db.Integer, db.ForeignKey("loans.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    fine_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    loan = db.relationship("Loan", backref="fines")
