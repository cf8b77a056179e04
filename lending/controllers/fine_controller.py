from flask import Blueprint, request, jsonify

from lending.services.fine_service import FineService

fine_bp = Blueprint("fines", __name__)


@fine_bp.post("/<int:fine_id>/transactions")
def record_transaction(fine_id: int):
    data = request.get_json(silent=True) or {}
    tx_id = FineService.record_transaction(fine_id, data.get("type"), data.get("date"))
    return jsonify({"success": True, "transaction_id": tx_id}), 201


@fine_bp.get("/<int:fine_id>/status")
def fine_status(fine_id: int):
    return jsonify({"success": True, "fine_id": fine_id, "status": FineService.fine_status(fine_id)})
