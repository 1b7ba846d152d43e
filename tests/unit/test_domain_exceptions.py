"""Tests for domain exceptions (error_code, message, details, envelope)."""

from craftly.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    CraftlyException,
    FirestoreUnavailableException,
    RecoveryCodesExhaustedException,
    ResourceNotFoundException,
    ValidationException,
)


def test_craftly_exception_default_error_code() -> None:
    """Base CraftlyException uses class name as error_code when not provided."""
    exc = CraftlyException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CraftlyException"
    assert exc.details == {}


def test_craftly_exception_custom_error_code_and_details() -> None:
    exc = CraftlyException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}


def test_to_dict_is_failure_envelope() -> None:
    """to_dict() is what the API returns: success false, error, code, details."""
    body = ValidationException("Invalid format", field="email").to_dict()
    assert body == {
        "success": False,
        "error": "Invalid format",
        "code": "VALIDATION_ERROR",
        "details": {"field": "email"},
    }


def test_to_dict_omits_empty_details() -> None:
    body = AuthenticationException("Invalid email or password").to_dict()
    assert "details" not in body


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_resource() -> None:
    exc = AuthorizationException("Unauthorized to access this cart", resource="cart")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"resource": "cart"}


def test_resource_not_found_message_and_details() -> None:
    """ResourceNotFoundException defaults to '<type> not found'."""
    exc = ResourceNotFoundException("Product", "p1")
    assert exc.message == "Product not found"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "product", "resource_id": "p1"}


def test_resource_not_found_custom_message() -> None:
    exc = ResourceNotFoundException("User", "u1", message="No such account")
    assert exc.message == "No such account"


def test_conflict_exception() -> None:
    exc = ConflictException("Email already in use", resource="user")
    assert exc.error_code == "CONFLICT"
    assert exc.details == {"resource": "user"}


def test_recovery_codes_exhausted() -> None:
    exc = RecoveryCodesExhaustedException()
    assert exc.error_code == "RECOVERY_CODES_EXHAUSTED"
    assert "No recovery codes remaining" in exc.message


def test_firestore_unavailable() -> None:
    assert FirestoreUnavailableException().error_code == "SERVICE_UNAVAILABLE"


def test_all_domain_exceptions_share_base() -> None:
    for exc in (
        ValidationException("x"),
        AuthenticationException(),
        AuthorizationException(),
        ResourceNotFoundException("Order", "o1"),
        ConflictException("x"),
        RecoveryCodesExhaustedException(),
        FirestoreUnavailableException(),
    ):
        assert isinstance(exc, CraftlyException)
