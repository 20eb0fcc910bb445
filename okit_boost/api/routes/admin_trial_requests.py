"""Admin routes for reviewing trial requests."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from okit_boost.api.deps import get_trial_service
from okit_boost.api.responses import failure, success
from okit_boost.components.trials import TrialService
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
def list_trial_requests(
    status: str | None = None,
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    """List trial requests, newest first, optionally filtered by status."""
    try:
        return success(trials=service.list_trials(status))
    except RemoteServiceError:
        logger.exception("Error fetching trial requests")
        return failure("Erreur lors de la récupération des demandes d'essai")


@router.patch("/{trial_id}", response_model=None)
def update_trial_request(
    trial_id: str,
    body: dict[str, Any] = Body(...),
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    try:
        return success(trial=service.update_trial(trial_id, body))
    except RemoteServiceError:
        logger.exception("Error updating trial request %s", trial_id)
        return failure("Erreur lors de la mise à jour de la demande")


@router.delete("/{trial_id}", response_model=None)
def delete_trial_request(
    trial_id: str,
    service: TrialService = Depends(get_trial_service),
) -> dict[str, Any] | JSONResponse:
    try:
        service.delete_trial(trial_id)
        return success()
    except RemoteServiceError:
        logger.exception("Error deleting trial request %s", trial_id)
        return failure("Erreur lors de la suppression de la demande")
