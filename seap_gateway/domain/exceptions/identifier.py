"""Identifier-related domain exceptions."""

from .base import DomainException


class InvalidIdentifierException(DomainException):
    """Raised when a national or tax identifier is malformed."""

    def __init__(self, message: str, identifier: str, code: str = "INVALID_IDENTIFIER"):
        super().__init__(message=message, code=code)
        self.identifier = identifier


class InvalidIdentifierLength(InvalidIdentifierException):
    """Raised when a person identifier is not 7-8 digits long."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Person identifier must have 7 or 8 digits: {identifier!r}",
            identifier=identifier,
            code="INVALID_IDENTIFIER_LENGTH",
        )
