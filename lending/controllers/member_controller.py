from flask import Blueprint, request, jsonify

from lending.services.member_service import MemberService
from lending.services.report_service import ReportService
from lending.services.reservation_service import ReservationService
from lending.utils.records import to_json

member_bp = Blueprint("members", __name__)


@member_bp.post("/")
def register():
    data = request.get_json(silent=True) or {}
    member_id = MemberService.register(
        name=data.get("name"),
        email=data.get("email"),
        role=data.get("role"),
        phone=data.get("phone"),
    )
    return jsonify({"success": True, "id": member_id}), 201


@member_bp.get("/<int:member_id>")
def get_member(member_id: int):
    m = MemberService.get_member(member_id)
    return jsonify({
        "success": True,
        "data": {"id": m.id, "name": m.name, "email": m.email, "phone": m.phone, "role": m.role}
    })


@member_bp.get("/<int:member_id>/loans")
def loan_history(member_id: int):
    rows = ReportService.loan_history(member_id, request.args.get("start"), request.args.get("end"))
    return jsonify({"success": True, "data": [to_json(r) for r in rows]})


@member_bp.get("/<int:member_id>/fines/outstanding")
def outstanding_fines(member_id: int):
    rows = ReportService.outstanding_fines(member_id)
    return jsonify({"success": True, "data": [to_json(r) for r in rows]})


@member_bp.get("/<int:member_id>/fines")
def member_fines(member_id: int):
    rows = ReportService.member_fines(member_id)
    return jsonify({"success": True, "data": [to_json(r) for r in rows]})


@member_bp.post("/<int:member_id>/reservations")
def reserve(member_id: int):
    data = request.get_json(silent=True) or {}
    try:
        copy_id = int(data["copy_id"])
    except KeyError:
        return jsonify({"success": False, "message": "copy_id is required"}), 400
    except (TypeError, ValueError):
        return jsonify({"success": False, "message": "copy_id must be an integer"}), 400

    reservation_id = ReservationService.reserve(member_id, copy_id, data.get("date"))
    return jsonify({"success": True, "id": reservation_id}), 201


@member_bp.get("/<int:member_id>/reservations")
def reservations(member_id: int):
    rows = ReservationService.list_for_member(member_id)
    return jsonify({"success": True, "data": [
        {
            "id": r.id,
            "copy_id": r.copy_id,
            "title": r.copy.item.title if r.copy and r.copy.item else None,
            "reserve_date": r.reserve_date.isoformat(),
        } for r in rows
    ]})
