"""Trial request submission and duplicate checks."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_optional_user, get_trial_service
from okit_boost.api.responses import error, unauthenticated
from okit_boost.components.trials import TrialService
from okit_boost.domain.entities import AuthUser
from okit_boost.domain.errors import DuplicateRequest, InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=None)
def submit_trial_request(
    body: dict[str, Any] = Body(...),
    user: AuthUser | None = Depends(get_optional_user),
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    """Submit a free trial request for the authenticated caller."""
    if user is None:
        return unauthenticated()
    try:
        service.submit(user, body)
        return {"success": True}
    except InvalidRequest as e:
        return error(e.message, status_code=400)
    except DuplicateRequest as e:
        return error(e.message, status_code=429)
    except RemoteServiceError:
        logger.exception("Trial request submission failed")
        return error("Erreur lors de la soumission de la demande")


@router.post("/check", response_model=None)
def check_trial_request(
    body: dict[str, Any] = Body(...),
    user: AuthUser | None = Depends(get_optional_user),
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    """Whether the caller already requested a trial, by account or by email."""
    if user is None:
        return unauthenticated()
    email = body.get("email")
    if not email or not isinstance(email, str):
        return error("Email requis", status_code=400)
    try:
        existing = service.find_existing(user.id, email)
    except RemoteServiceError as e:
        logger.exception("Trial check failed")
        return check_failed(e)
    return {
        "hasExisting": existing is not None,
        "request": existing,
        "message": (
            "Une demande d'essai existe déjà pour ce compte"
            if existing is not None
            else "Aucune demande existante"
        ),
    }


@router.get("/check", response_model=None)
def list_own_trial_requests(
    user: AuthUser | None = Depends(get_optional_user),
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    if user is None:
        return unauthenticated()
    try:
        requests = service.list_user_trial_summaries(user.id)
    except RemoteServiceError as e:
        logger.exception("Trial check failed")
        return check_failed(e)
    return {"hasExisting": bool(requests), "requests": requests, "count": len(requests)}


def check_failed(e: RemoteServiceError) -> JSONResponse:
    return JSONResponse(
        {"error": "Erreur lors de la vérification", "details": e.message}, status_code=500
    )
