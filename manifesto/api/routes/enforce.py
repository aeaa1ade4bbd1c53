"""
Enforcement Route — POST /enforce

Blocked actions return 409 with the exact rejection message as `detail`;
malformed actions return 400.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from manifesto.api.dependencies import get_coordinator
from manifesto.engine.coordinator import EnforcementCoordinator
from manifesto.errors import EnforcementError, InvalidInputError
from manifesto.models.action_models import Action, EnforcementStatus
from manifesto.models.api_models import EnforceRequest, EnforceResponse

router = APIRouter()


@router.post("/enforce", response_model=EnforceResponse)
async def enforce_action(
    req: EnforceRequest,
    coordinator: EnforcementCoordinator = Depends(get_coordinator),
):
    try:
        await coordinator.enforce(Action(type=req.type, payload=req.payload))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EnforcementError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return EnforceResponse(allowed=True, action_type=req.type)


@router.get("/enforce/status", response_model=EnforcementStatus)
async def enforcement_status(
    coordinator: EnforcementCoordinator = Depends(get_coordinator),
):
    return coordinator.get_enforcement_status()
