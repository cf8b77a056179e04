from sqlalchemy import text
from lending.extensions import db

# SQL Server counterpart of the partial unique index the model declares for
# SQLite/PostgreSQL: a copy can have only one loan with return_date IS NULL.
OPEN_LOAN_INDEX_SQL = r"""
IF OBJECT_ID(N'dbo.loans', N'U') IS NOT NULL
   AND NOT EXISTS (
        SELECT 1 FROM sys.indexes
        WHERE name = N'ux_loans_open_copy' AND object_id = OBJECT_ID(N'dbo.loans')
   )
BEGIN
    CREATE UNIQUE NONCLUSTERED INDEX ux_loans_open_copy
    ON dbo.loans (copy_id)
    WHERE return_date IS NULL;
END
"""

# Open-loan counting per member is the hot path of every borrow.
OPEN_LOANS_BY_MEMBER_SQL = r"""
IF OBJECT_ID(N'dbo.loans', N'U') IS NOT NULL
   AND NOT EXISTS (
        SELECT 1 FROM sys.indexes
        WHERE name = N'ix_loans_member_open' AND object_id = OBJECT_ID(N'dbo.loans')
   )
BEGIN
    CREATE NONCLUSTERED INDEX ix_loans_member_open
    ON dbo.loans (member_id)
    WHERE return_date IS NULL;
END
"""


def ensure_db_objects_mssql(app) -> bool:
    """Returns False (and does nothing) when the engine is not SQL Server."""
    with app.app_context():
        if db.engine.dialect.name != "mssql":
            return False

        conn = db.engine.connect()
        trans = conn.begin()
        try:
            conn.execute(text(OPEN_LOAN_INDEX_SQL))
            conn.execute(text(OPEN_LOANS_BY_MEMBER_SQL))
            trans.commit()
            app.logger.info("[db_objects_mssql] Filtered loan indexes ensured.")
            return True
        except Exception as e:
            trans.rollback()
            app.logger.error(f"[db_objects_mssql] ERROR: {e}")
            raise
        finally:
            conn.close()
