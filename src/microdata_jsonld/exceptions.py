"""Exceptions raised by the Microdata to JSON-LD converter."""


class MicrodataError(Exception):
    """Base class for converter errors."""


class InvalidJSONError(MicrodataError):
    """Raised when JSON-LD text supplied for validation cannot be parsed."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid JSON syntax: {detail}")
