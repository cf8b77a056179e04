from flask import current_app

from lending.unit_of_work import unit_of_work
from lending.errors import NotFound
from lending.models.reservation import Reservation
from lending.repositories.catalog_repo import CatalogRepo
from lending.repositories.member_repo import MemberRepo
from lending.repositories.reservation_repo import ReservationRepo
from lending.utils.dates import parse_date


class ReservationService:
    """Reservations are advisory holds; borrowing never consults them."""

    @staticmethod
    def reserve(member_id: int, copy_id: int, reserve_date) -> int:
        reserve_date = parse_date(reserve_date, "reserve date")

        with unit_of_work():
            if not MemberRepo.get_by_id(member_id):
                raise NotFound(f"Member {member_id} not found")
            if not CatalogRepo.get_copy(copy_id):
                raise NotFound(f"Copy {copy_id} not found")

            reservation = ReservationRepo.create(Reservation(
                member_id=member_id,
                copy_id=copy_id,
                reserve_date=reserve_date,
            ))
            reservation_id = reservation.id

        current_app.logger.info(f"[reservations] reservation={reservation_id} member={member_id} copy={copy_id}")
        return reservation_id

    @staticmethod
    def list_for_member(member_id: int):
        if not MemberRepo.get_by_id(member_id):
            raise NotFound(f"Member {member_id} not found")
        return ReservationRepo.list_by_member(member_id)
