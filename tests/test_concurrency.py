import threading
from datetime import date
from decimal import Decimal

from sqlalchemy.dialects import mssql, postgresql, sqlite

from lending.errors import AlreadyReturned, BorrowLimitExceeded, Conflict
from lending.extensions import db
from lending.models.fine import Fine
from lending.repositories.loan_repo import LoanRepo
from lending.repositories.member_repo import MemberRepo
from lending.services.lending_service import LendingService


def _race(app, member_id, copy_ids, day):
    barrier = threading.Barrier(len(copy_ids))
    results, errors = [], []
    lock = threading.Lock()

    def worker(copy_id):
        with app.app_context():
            barrier.wait()
            try:
                loan_id = LendingService.borrow(member_id, copy_id, day)
                with lock:
                    results.append(loan_id)
            except (BorrowLimitExceeded, Conflict) as e:
                with lock:
                    errors.append(e)

    threads = [threading.Thread(target=worker, args=(c,)) for c in copy_ids]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)
    return results, errors


def test_racing_borrows_for_last_slot(app, library):
    for copy_id in library.copies[:4]:
        LendingService.borrow(library.alice, copy_id, date(2024, 9, 1))
    db.session.remove()

    results, errors = _race(app, library.alice, library.copies[4:8], date(2024, 9, 2))

    assert len(results) == 1
    assert len(errors) == 3
    assert LoanRepo.count_open_by_member(library.alice) == 5


def test_racing_borrows_never_exceed_limit(app, library):
    results, errors = _race(app, library.bob, library.copies, date(2024, 9, 1))

    assert len(results) + len(errors) == len(library.copies)
    assert len(results) <= 5
    assert LoanRepo.count_open_by_member(library.bob) == len(results) <= 5


def test_racing_returns_close_loan_once(app, library):
    loan_id = LendingService.borrow(library.alice, library.copies[0], date(2024, 9, 1))
    db.session.remove()

    days = [date(2024, 9, 20), date(2024, 9, 25)]
    barrier = threading.Barrier(len(days))
    returned, errors = [], []
    lock = threading.Lock()

    def worker(day):
        with app.app_context():
            barrier.wait()
            try:
                LendingService.return_loan(loan_id, day)
                with lock:
                    returned.append(day)
            except (AlreadyReturned, Conflict) as e:
                with lock:
                    errors.append(e)

    threads = [threading.Thread(target=worker, args=(d,)) for d in days]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert len(returned) == 1
    assert len(errors) == 1

    db.session.remove()
    loan = LoanRepo.get(loan_id)
    fines = Fine.query.filter_by(loan_id=loan_id).all()
    assert loan.return_date == returned[0]
    assert len(fines) == 1
    # 14-day book loan due 2024-09-15
    assert fines[0].amount == Decimal((returned[0] - date(2024, 9, 15)).days)


def test_row_locks_use_updlock_hint_on_sql_server(app):
    for query in (MemberRepo.lock_query(1), LoanRepo.lock_query(1)):
        sql = str(query.statement.compile(dialect=mssql.dialect()))
        assert "WITH (UPDLOCK, ROWLOCK)" in sql


def test_row_locks_use_for_update_elsewhere(app):
    for query in (MemberRepo.lock_query(1), LoanRepo.lock_query(1)):
        pg_sql = str(query.statement.compile(dialect=postgresql.dialect()))
        sqlite_sql = str(query.statement.compile(dialect=sqlite.dialect()))
        assert "FOR UPDATE" in pg_sql
        assert "UPDLOCK" not in pg_sql
        assert "UPDLOCK" not in sqlite_sql
