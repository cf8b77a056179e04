from lending.models.fine import Fine
from lending.models.transaction import FineTransaction
from lending.extensions import db


class FineRepo:
    @staticmethod
    def get(fine_id: int):
        return db.session.get(Fine, fine_id)

    @staticmethod
    def create(fine: Fine):
        db.session.add(fine)
        db.session.flush()
        return fine

    @staticmethod
    def add_transaction(tx: FineTransaction):
        db.session.add(tx)
        db.session.flush()
        return tx

    @staticmethod
    def list_transactions(fine_id: int):
        return (
            FineTransaction.query
            .filter_by(fine_id=fine_id)
            .order_by(FineTransaction.date.asc(), FineTransaction.id.asc())
            .all()
        )
