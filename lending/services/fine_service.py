from flask import current_app

from lending.unit_of_work import unit_of_work
from lending.errors import NotFound, ValidationError
from lending.models.transaction import FineTransaction, PAYMENT, TRANSACTION_TYPES
from lending.repositories.fine_repo import FineRepo
from lending.utils.dates import parse_date

PAID = "Paid"
OUTSTANDING = "Outstanding"


def derive_status(transaction_types, settling_types) -> str:
    """Paid once any transaction has a settling type, otherwise Outstanding."""
    settling = set(settling_types)
    return PAID if any(t in settling for t in transaction_types) else OUTSTANDING


class FineService:
    @staticmethod
    def settling_types() -> tuple:
        return tuple(current_app.config.get("FINE_SETTLING_TYPES") or (PAYMENT,))

    @staticmethod
    def record_transaction(fine_id: int, tx_type: str, tx_date) -> int:
        """
        Appends a Payment or Waiver against a fine and returns its id.
        Repeated payments are accepted as-is.
        """
        tx_type = str(tx_type or "").strip().capitalize()
        if tx_type not in TRANSACTION_TYPES:
            raise ValidationError(
                f"Transaction type must be one of {', '.join(TRANSACTION_TYPES)}"
            )
        tx_date = parse_date(tx_date, "transaction date")

        with unit_of_work():
            fine = FineRepo.get(fine_id)
            if not fine:
                raise NotFound(f"Fine {fine_id} not found")

            tx = FineRepo.add_transaction(FineTransaction(type=tx_type, date=tx_date, fine_id=fine.id))
            tx_id = tx.id

        current_app.logger.info(f"[fines] transaction={tx_id} type={tx_type} fine={fine_id} date={tx_date}")
        return tx_id

    @staticmethod
    def fine_status(fine_id: int) -> str:
        fine = FineRepo.get(fine_id)
        if not fine:
            raise NotFound(f"Fine {fine_id} not found")
        types = [t.type for t in FineRepo.list_transactions(fine_id)]
        return derive_status(types, FineService.settling_types())
