from lending.models.item_type import ItemType
from lending.models.item import Item
from lending.models.copy import Copy
from lending.extensions import db


class CatalogRepo:
    @staticmethod
    def get_item_type(item_type_id: int):
        return db.session.get(ItemType, item_type_id)

    @staticmethod
    def list_item_types():
        return ItemType.query.order_by(ItemType.id.asc()).all()

    @staticmethod
    def get_item(item_id: int):
        return db.session.get(Item, item_id)

    @staticmethod
    def get_item_by_isbn(isbn: str):
        return Item.query.filter_by(isbn=isbn).first()

    @staticmethod
    def get_copy(copy_id: int):
        return db.session.get(Copy, copy_id)

    @staticmethod
    def loan_period_for_copy(copy_id: int):
        """Copy -> Item -> ItemType in one query. None when any link is missing."""
        return (
            db.session.query(ItemType.loan_period_days)
            .join(Item, Item.item_type_id == ItemType.id)
            .join(Copy, Copy.item_id == Item.id)
            .filter(Copy.id == copy_id)
            .scalar()
        )

    @staticmethod
    def add(entity):
        db.session.add(entity)
        db.session.flush()
        return entity
