from typing import Any, Literal, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from loguru import logger

from app.config import get_settings
from app.errors import CarrierAPIError, CarrierAuthError, InvalidEventBatch
from app.schemas import TrackingResponse, TrackRequest
from app.services.maersk import MaerskService
from app.services.tracking import TrackingEngine

router = APIRouter(prefix="/track", tags=["Tracking"])


def get_maersk() -> MaerskService:
    return MaerskService()


def get_engine() -> TrackingEngine:
    return TrackingEngine(include_document_events=get_settings().include_document_events)


def _reconcile(engine: TrackingEngine, payload: Any, reference: Optional[str], order: str) -> dict:
    try:
        result = engine.reconcile(payload, document_reference=reference)
    except InvalidEventBatch as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict(newest_first_plan=(order == "desc"))


@router.post("", response_model=TrackingResponse)
def track(
    request: TrackRequest,
    order: Literal["asc", "desc"] = "asc",
    maersk: MaerskService = Depends(get_maersk),
    engine: TrackingEngine = Depends(get_engine),
):
    """Live lookup: fetch the carrier events, then reconcile them."""
    try:
        payload = maersk.fetch_events(request.trackingNumber)
    except CarrierAuthError as e:
        raise HTTPException(status_code=500, detail=f"Authentication failed: {e}")
    except CarrierAPIError as e:
        raise HTTPException(status_code=500, detail=f"An internal error occurred: {e}")

    logger.debug(f"[Track] Reconciling carrier payload for {request.trackingNumber}")
    return _reconcile(engine, payload, request.trackingNumber, order)


@router.post("/reconcile", response_model=TrackingResponse)
def reconcile(
    payload: Union[list, dict] = Body(...),
    trackingNumber: Optional[str] = None,
    order: Literal["asc", "desc"] = "asc",
    engine: TrackingEngine = Depends(get_engine),
):
    """Offline: reconcile an event payload supplied by the caller."""
    return _reconcile(engine, payload, trackingNumber, order)
