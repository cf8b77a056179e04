from lending.extensions import db

PAYMENT = "Payment"
WAIVER = "Waiver"
TRANSACTION_TYPES = (PAYMENT, WAIVER)


class FineTransaction(db.Model):
    __tablename__ = "transactions"

    id = db.Column(db.Integer, primary_key=True)

    type = db.Column(db.String(20), nullable=False)  # Payment / Waiver
    date = db.Column(db.Date, nullable=False)

    fine_id = db.Column(db.Integer, db.ForeignKey("fines.id"), nullable=False, index=True)

    fine = db.relationship("Fine", backref="transactions")
