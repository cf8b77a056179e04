from lending.extensions import db


class Copy(db.Model):
    __tablename__ = "copies"

    id = db.Column(db.Integer, primary_key=True)
    condition = db.Column(db.String(50), nullable=False)
    location = db.Column(db.String(100), nullable=False)

    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)

    item = db.relationship("Item", backref="copies")
