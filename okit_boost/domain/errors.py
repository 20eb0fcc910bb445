class InvalidRequest(ValueError):
    """Request payload is missing required data. Message is user-facing."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class DuplicateRequest(ValueError):
    """Request conflicts with an existing record. Message is user-facing."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
