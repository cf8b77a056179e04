from lending.extensions import db


class Item(db.Model):
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    author = db.Column(db.String(255), nullable=True)
    isbn = db.Column(db.String(20), unique=True, nullable=True, index=True)
    issn = db.Column(db.String(20), nullable=True, index=True)

    # serial / media details
    volume = db.Column(db.Integer, nullable=True)
    issue = db.Column(db.Integer, nullable=True)
    format = db.Column(db.String(50), nullable=True)
    size = db.Column(db.String(50), nullable=True)

    item_type_id = db.Column(db.Integer, db.ForeignKey("item_types.id"), nullable=False, index=True)

    item_type = db.relationship("ItemType", backref="items")
