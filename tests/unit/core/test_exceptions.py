"""
Unit Tests for Custom Exceptions.
"""

from toodooist.core.exceptions import (
    ApplicationError,
    CorruptDataError,
    NotFoundError,
    StoreError,
    StoreReadError,
    ValidationError,
    WriteFailureError,
)


class TestErrorCodes:
    """Each exception carries a stable code."""

    def test_validation_error_keeps_details(self):
        error = ValidationError("bad", details={"description": "too long"})
        assert error.code == "VAL_VALIDATION_ERROR"
        assert error.details == {"description": "too long"}
        assert str(error) == "bad"

    def test_validation_error_details_default_empty(self):
        assert ValidationError().details == {}

    def test_not_found_code(self):
        assert NotFoundError().code == "RES_NOT_FOUND"

    def test_store_error_codes(self):
        assert CorruptDataError().code == "STORE_CORRUPT_DATA"
        assert StoreReadError().code == "STORE_READ_FAILURE"
        assert WriteFailureError().code == "STORE_WRITE_FAILURE"


class TestHierarchy:
    """Store errors share a base so callers can catch them together."""

    def test_store_errors_are_store_errors(self):
        for error_cls in (CorruptDataError, StoreReadError, WriteFailureError):
            assert issubclass(error_cls, StoreError)
            assert issubclass(error_cls, ApplicationError)
