from flask import current_app

from lending.unit_of_work import unit_of_work
from lending.errors import Conflict, NotFound, ValidationError
from lending.models.member import Member
from lending.repositories.member_repo import MemberRepo


class MemberService:
    @staticmethod
    def register(name: str, email: str, role: str, phone: str = None) -> int:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        role = (role or "").strip()
        if not name or not email or not role:
            raise ValidationError("name/email/role are required")

        with unit_of_work():
            if MemberRepo.get_by_email(email):
                raise Conflict(f"Email {email} is already registered")
            member = MemberRepo.create(Member(
                name=name,
                email=email,
                phone=(phone or None),
                role=role,
            ))
            member_id = member.id

        current_app.logger.info(f"[members] member={member_id} role={role}")
        return member_id

    @staticmethod
    def get_member(member_id: int) -> Member:
        member = MemberRepo.get_by_id(member_id)
        if not member:
            raise NotFound(f"Member {member_id} not found")
        return member
