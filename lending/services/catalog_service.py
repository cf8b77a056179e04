from flask import current_app

from lending.unit_of_work import unit_of_work
from lending.errors import Conflict, NotFound, ValidationError
from lending.models.copy import Copy
from lending.models.item import Item
from lending.models.item_type import ItemType
from lending.repositories.catalog_repo import CatalogRepo


def _positive_int(value, field: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field} must be positive")
    return number


class CatalogService:
    @staticmethod
    def create_item_type(name: str, loan_period_days) -> int:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        loan_period_days = _positive_int(loan_period_days, "loan_period_days")

        with unit_of_work():
            item_type = CatalogRepo.add(ItemType(name=name, loan_period_days=loan_period_days))
            item_type_id = item_type.id

        current_app.logger.info(f"[catalog] item_type={item_type_id} '{name}' loan_period={loan_period_days}")
        return item_type_id

    @staticmethod
    def list_item_types():
        return CatalogRepo.list_item_types()

    @staticmethod
    def create_item(data: dict) -> int:
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationError("title is required")
        item_type_id = _positive_int(data.get("item_type_id"), "item_type_id")
        isbn = (data.get("isbn") or "").strip() or None

        with unit_of_work():
            if not CatalogRepo.get_item_type(item_type_id):
                raise NotFound(f"Item type {item_type_id} not found")
            if isbn and CatalogRepo.get_item_by_isbn(isbn):
                raise Conflict(f"ISBN {isbn} is already registered")

            item = CatalogRepo.add(Item(
                title=title,
                author=(data.get("author") or None),
                isbn=isbn,
                issn=(data.get("issn") or None),
                volume=data.get("volume"),
                issue=data.get("issue"),
                format=data.get("format"),
                size=data.get("size"),
                item_type_id=item_type_id,
            ))
            item_id = item.id

        current_app.logger.info(f"[catalog] item={item_id} '{title}'")
        return item_id

    @staticmethod
    def create_copy(item_id: int, condition: str, location: str) -> int:
        condition = (condition or "").strip()
        location = (location or "").strip()
        if not condition or not location:
            raise ValidationError("condition and location are required")

        with unit_of_work():
            if not CatalogRepo.get_item(item_id):
                raise NotFound(f"Item {item_id} not found")
            copy = CatalogRepo.add(Copy(condition=condition, location=location, item_id=item_id))
            copy_id = copy.id

        return copy_id

    @staticmethod
    def get_copy(copy_id: int):
        copy = CatalogRepo.get_copy(copy_id)
        if not copy:
            raise NotFound(f"Copy {copy_id} not found")
        return copy
