"""Trial request form action."""

import logging
from collections.abc import Mapping
from typing import Any

from okit_boost.actions.errors import ActionError
from okit_boost.context import ServiceContext
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)


def submit_trial_request(ctx: ServiceContext, form: Mapping[str, Any]) -> dict[str, bool]:
    """Insert the submitted form as a trial request."""
    try:
        ctx.trial_service.submit_form(form)
    except RemoteServiceError as e:
        logger.exception("Error submitting trial request")
        raise ActionError("Erreur lors de la soumission de la demande") from e
    return {"success": True}
