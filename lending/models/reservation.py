from lending.extensions import db


class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    member_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=False, index=True)
    copy_id = db.Column(db.Integer, db.ForeignKey("copies.id"), nullable=False, index=True)

    reserve_date = db.Column(db.Date, nullable=False)

    member = db.relationship("Member", backref="reservations")
    copy = db.relationship("Copy", backref="reservations")
