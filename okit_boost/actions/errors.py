class ActionError(Exception):
    """A form action failed. Message is user-facing."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthRequired(ActionError):
    """Caller must sign in; `redirect_to` is where the UI should send them."""

    def __init__(self, message: str, redirect_to: str):
        super().__init__(message)
        self.redirect_to = redirect_to


class AdminRequired(AuthRequired):
    """Caller is signed in but is not an admin."""
