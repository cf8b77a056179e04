from lending.extensions import db


class ItemType(db.Model):
    __tablename__ = "item_types"
    __table_args__ = (
        db.CheckConstraint("loan_period_days > 0", name="ck_item_types_loan_period_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    loan_period_days = db.Column(db.Integer, nullable=False)
