"""Tests for store error translation."""
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from admin_server.errors import (
    ConflictError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
    translate_store_error,
)


def test_integrity_error_is_conflict():
    err = translate_store_error(IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed")))
    assert isinstance(err, ConflictError)
    assert err.status_code == 409


def test_stale_data_is_conflict():
    assert isinstance(translate_store_error(StaleDataError("version mismatch")), ConflictError)


def test_other_store_failures_are_transient():
    err = translate_store_error(OperationalError("SELECT 1", {}, Exception("database is locked")))
    assert isinstance(err, TransientStoreError)
    assert err.status_code == 500


def test_not_found_detail_has_no_cause():
    assert NotFoundError().to_detail() == {"error": "not_found", "error_description": "Resource server not found"}


def test_validation_error_carries_fields():
    err = ValidationError(fields=[{"field": "name", "message": "required"}])
    assert err.status_code == 400
    assert err.to_detail()["fields"] == [{"field": "name", "message": "required"}]
