from types import SimpleNamespace

import pytest

from lending import create_app
from lending.config import Config
from lending.extensions import db
from lending.services.catalog_service import CatalogService
from lending.services.member_service import MemberService


def make_config(db_path, **overrides):
    attrs = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path}",
        # file database shared by worker threads in the concurrency tests
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"check_same_thread": False, "timeout": 30}},
        "LOG_LEVEL": "WARNING",
    }
    attrs.update(overrides)
    return type("TestingConfig", (Config,), attrs)


@pytest.fixture
def app(tmp_path):
    app = create_app(make_config(tmp_path / "lending.db"))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def library(app):
    """Book (14 days) and Journal (7 days) types, 8 book copies, 1 journal copy, one member per role."""
    book = CatalogService.create_item_type("Book", 14)
    journal = CatalogService.create_item_type("Journal", 7)

    gatsby = CatalogService.create_item({
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "item_type_id": book,
    })
    nature = CatalogService.create_item({"title": "Nature Journal", "issn": "0028-0836", "item_type_id": journal})

    copies = [CatalogService.create_copy(gatsby, "Good", f"Shelf A{i}") for i in range(1, 9)]
    journal_copy = CatalogService.create_copy(nature, "Good", "Shelf B2")

    return SimpleNamespace(
        book_type=book,
        journal_type=journal,
        gatsby=gatsby,
        nature=nature,
        copies=copies,
        journal_copy=journal_copy,
        alice=MemberService.register("Alice Smith", "alice.smith@university.edu", "Student", "123-456-7890"),
        bob=MemberService.register("Bob Johnson", "bob.johnson@university.edu", "Faculty"),
        carol=MemberService.register("Carol Davis", "carol.davis@university.edu", "Staff"),
        dave=MemberService.register("Dave Visitor", "dave@example.com", "Guest"),
    )
