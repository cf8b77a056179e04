from flask import Blueprint, request, jsonify

from lending.models.member import LENDING_ROLES
from lending.services.lending_service import LendingService
from lending.services.report_service import ReportService
from lending.utils.records import to_json

loan_bp = Blueprint("loans", __name__)


@loan_bp.post("/")
def borrow():
    data = request.get_json(silent=True) or {}
    try:
        member_id = int(data["member_id"])
        copy_id = int(data["copy_id"])
    except KeyError:
        return jsonify({"success": False, "message": "member_id and copy_id are required"}), 400
    except (TypeError, ValueError):
        return jsonify({"success": False, "message": "member_id and copy_id must be integers"}), 400

    loan_id = LendingService.borrow(member_id, copy_id, data.get("date"))
    return jsonify({"success": True, "loan_id": loan_id}), 201


@loan_bp.post("/<int:loan_id>/return")
def return_loan(loan_id: int):
    data = request.get_json(silent=True) or {}
    LendingService.return_loan(loan_id, data.get("date"))
    return jsonify({"success": True, "loan_id": loan_id})


@loan_bp.get("/current")
def current_loans():
    member_id = request.args.get("member_id", type=int)
    roles = request.args.getlist("role")
    # ?role=lending is shorthand for Student/Faculty/Staff
    if roles == ["lending"]:
        roles = list(LENDING_ROLES)

    rows = ReportService.current_loans(member_id=member_id, roles=roles or None)
    return jsonify({"success": True, "data": [to_json(r) for r in rows]})
