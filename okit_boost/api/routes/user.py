"""Routes scoped to the authenticated caller."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_optional_user, get_trial_service
from okit_boost.api.responses import error, unauthenticated
from okit_boost.components.trials import TrialService
from okit_boost.domain.entities import AuthUser
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/trial-requests", response_model=None)
def list_my_trial_requests(
    user: AuthUser | None = Depends(get_optional_user),
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    """The caller's trial requests, newest first."""
    if user is None:
        return unauthenticated()
    try:
        return {"trials": service.list_user_trials(user.id)}
    except RemoteServiceError:
        logger.exception("User trials fetch failed for %s", user.id)
        return error("Erreur lors de la récupération des demandes")
