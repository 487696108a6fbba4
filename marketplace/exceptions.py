"""
Error taxonomy for the messaging service

Each error carries the HTTP status it maps to; handlers in main.py turn
them into ``{"error": ...}`` responses.
"""
from typing import List, Optional


class MarketplaceError(Exception):
    """Base class for service errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(MarketplaceError):
    """Missing or invalid input, detected before any mutation"""

    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.fields:
            body["fields"] = self.fields
        return body


class NotFoundError(MarketplaceError):
    """Referenced listing or user does not exist"""

    status_code = 404


class StorageError(MarketplaceError):
    """Underlying persistence failure"""

    status_code = 500
