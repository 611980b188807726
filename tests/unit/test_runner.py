"""Tests for the server startup summary."""

from foodgarden.web.runner import describe_store


def test_credentials_are_not_reported():
    info = describe_store("mongodb://user:pw@db.example:27017/garden")

    assert info == {"store_host": "db.example", "store_database": "garden"}


def test_default_database_name():
    assert describe_store("mongodb://localhost:27017")["store_database"] == "foodsdb"
