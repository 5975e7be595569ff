"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    `code` is a stable machine-readable identifier; API error bodies and
    audit trail details carry it instead of the exception class name.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}
