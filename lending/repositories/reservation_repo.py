from lending.models.reservation import Reservation
from lending.extensions import db


class ReservationRepo:
    @staticmethod
    def list_by_member(member_id: int):
        return (
            Reservation.query
            .filter_by(member_id=member_id)
            .order_by(Reservation.reserve_date.asc(), Reservation.id.asc())
            .all()
        )

    @staticmethod
    def create(reservation: Reservation):
        db.session.add(reservation)
        db.session.flush()
        return reservation
