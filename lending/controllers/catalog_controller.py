# lending/controllers/catalog_controller.py

from flask import Blueprint, request, jsonify

from lending.services.catalog_service import CatalogService

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.get("/item-types")
def list_item_types():
    return jsonify({
        "success": True,
        "data": [
            {"id": t.id, "name": t.name, "loan_period_days": t.loan_period_days}
            for t in CatalogService.list_item_types()
        ]
    })


@catalog_bp.post("/item-types")
def create_item_type():
    data = request.get_json(silent=True) or {}
    item_type_id = CatalogService.create_item_type(data.get("name"), data.get("loan_period_days"))
    return jsonify({"success": True, "id": item_type_id}), 201


@catalog_bp.post("/items")
def create_item():
    data = request.get_json(silent=True) or {}
    item_id = CatalogService.create_item(data)
    return jsonify({"success": True, "id": item_id}), 201


@catalog_bp.post("/copies")
def create_copy():
    data = request.get_json(silent=True) or {}
    try:
        item_id = int(data["item_id"])
    except KeyError:
        return jsonify({"success": False, "message": "item_id is required"}), 400
    except (TypeError, ValueError):
        return jsonify({"success": False, "message": "item_id must be an integer"}), 400

    copy_id = CatalogService.create_copy(item_id, data.get("condition"), data.get("location"))
    return jsonify({"success": True, "id": copy_id}), 201


@catalog_bp.get("/copies/<int:copy_id>")
def get_copy(copy_id: int):
    c = CatalogService.get_copy(copy_id)
    return jsonify({
        "success": True,
        "data": {
            "id": c.id,
            "condition": c.condition,
            "location": c.location,
            "item_id": c.item_id,
            "title": c.item.title if c.item else None,
        }
    })
