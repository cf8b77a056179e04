# lending/cli.py
import click
from flask import current_app
from flask.cli import with_appcontext

from lending.db_objects_mssql import ensure_db_objects_mssql
from lending.extensions import db
from lending.models.member import FACULTY, STAFF, STUDENT
from lending.repositories.catalog_repo import CatalogRepo
from lending.services.catalog_service import CatalogService
from lending.services.lending_service import LendingService
from lending.services.member_service import MemberService
from lending.services.reservation_service import ReservationService


def seed_demo_data() -> dict:
    """
    Loads the sample catalog: three item types, three items with one copy
    each, one member per role, two loans (one returned) and a reservation.
    Returns the created ids keyed by name.
    """
    ids = {}

    ids["book"] = CatalogService.create_item_type("Book", 14)
    ids["journal"] = CatalogService.create_item_type("Journal", 7)
    ids["digital_media"] = CatalogService.create_item_type("Digital Media", 30)

    ids["gatsby"] = CatalogService.create_item({
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "item_type_id": ids["book"],
    })
    ids["nature"] = CatalogService.create_item({
        "title": "Nature Journal",
        "issn": "0028-0836",
        "item_type_id": ids["journal"],
    })
    ids["clrs"] = CatalogService.create_item({
        "title": "Introduction to Algorithms",
        "author": "Cormen et al.",
        "isbn": "9780262033848",
        "item_type_id": ids["book"],
    })

    ids["copy_gatsby"] = CatalogService.create_copy(ids["gatsby"], "Good", "Shelf A1")
    ids["copy_nature"] = CatalogService.create_copy(ids["nature"], "Good", "Shelf B2")
    ids["copy_clrs"] = CatalogService.create_copy(ids["clrs"], "Fair", "Shelf C3")

    ids["alice"] = MemberService.register("Alice Smith", "alice.smith@university.edu", STUDENT, "123-456-7890")
    ids["bob"] = MemberService.register("Bob Johnson", "bob.johnson@university.edu", FACULTY, "098-765-4321")
    ids["carol"] = MemberService.register("Carol Davis", "carol.davis@university.edu", STAFF, "555-555-5555")

    ids["loan_alice"] = LendingService.borrow(ids["alice"], ids["copy_gatsby"], "2024-09-01")
    LendingService.return_loan(ids["loan_alice"], "2024-09-15")
    ids["loan_bob"] = LendingService.borrow(ids["bob"], ids["copy_clrs"], "2024-09-05")

    ids["reservation_carol"] = ReservationService.reserve(ids["carol"], ids["copy_clrs"], "2024-09-10")
    return ids


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create tables and SQL Server specific indexes."""
    db.create_all()
    ensure_db_objects_mssql(current_app)
    click.echo("Database initialized.")


@click.command("seed-demo")
@with_appcontext
def seed_demo_command():
    """Load the sample catalog, members and loans."""
    db.create_all()
    if CatalogRepo.list_item_types():
        click.echo("Database already has catalog data, skipping seed.")
        return
    ids = seed_demo_data()
    current_app.logger.info(f"[cli] demo data seeded: {len(ids)} rows")
    click.echo(f"Seeded {len(ids)} records.")
