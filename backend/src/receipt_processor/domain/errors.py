"""Exceptions raised by the receipt store and surfaced by the API."""


class ReceiptError(Exception):
    """Base exception for all receipt processing errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidIdentifierError(ReceiptError):
    """Raised when a receipt identifier is not a well-formed UUID."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid receipt id: {identifier!r}", status_code=400)


class ReceiptNotFoundError(ReceiptError):
    """Raised when no receipt was stored under an identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No receipt found for id {identifier}", status_code=404)
