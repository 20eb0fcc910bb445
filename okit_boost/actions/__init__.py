"""
Server-side actions backing the UI forms.

Each action takes the ServiceContext built by the application root and,
where identity matters, the caller's access token.
"""

from .errors import ActionError, AdminRequired, AuthRequired

__all__ = ["ActionError", "AuthRequired", "AdminRequired"]
