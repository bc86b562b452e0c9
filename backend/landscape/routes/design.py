# landscape/routes/design.py

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from landscape.errors import PayloadTooLarge, PreconditionError, StageBusyError, UnsupportedMediaType
from landscape.models.requests import FeatureSelection
from landscape.models.responses import SessionResponse
from landscape.services.encoder import read_upload
from landscape.services.pipeline import PipelineCoordinator
from landscape.services.sessions import SessionStore
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions")


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_coordinator(session_id: str, store: SessionStore = Depends(get_store)) -> PipelineCoordinator:
    coordinator = store.get(session_id)
    if coordinator is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return coordinator


def _session_response(session_id: str, coordinator: PipelineCoordinator) -> SessionResponse:
    return SessionResponse(
        sessionId=session_id,
        hasReference=coordinator.reference is not None,
        stages=coordinator.states(),
        rebateUrl=coordinator.config.REBATE_URL,
    )


@router.post("", response_model=SessionResponse, status_code=201)
def create_session(store: SessionStore = Depends(get_store)):
    session_id = store.create()
    return _session_response(session_id, store.get(session_id))


@router.get("/{session_id}", response_model=SessionResponse)
def read_session(session_id: str, coordinator: PipelineCoordinator = Depends(get_coordinator)):
    return _session_response(session_id, coordinator)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, store: SessionStore = Depends(get_store)):
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.put("/{session_id}/reference", response_model=SessionResponse)
async def upload_reference(
    session_id: str,
    file: UploadFile = File(...),
    coordinator: PipelineCoordinator = Depends(get_coordinator),
):
    try:
        image = await read_upload(file, coordinator.config.MAX_REFERENCE_BYTES)
    except UnsupportedMediaType as e:
        raise HTTPException(status_code=415, detail=str(e))
    except PayloadTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))

    coordinator.set_reference(image)
    logger.info("Session %s reference set: %s (%d bytes)", session_id, image.filename, image.size)
    return _session_response(session_id, coordinator)


@router.delete("/{session_id}/reference", response_model=SessionResponse)
def clear_reference(session_id: str, coordinator: PipelineCoordinator = Depends(get_coordinator)):
    coordinator.clear_reference()
    return _session_response(session_id, coordinator)


# Collaborator failures come back as a failed stage inside a 200, not as HTTP errors.

@router.post("/{session_id}/design", response_model=SessionResponse)
async def run_design(
    session_id: str,
    selection: FeatureSelection,
    coordinator: PipelineCoordinator = Depends(get_coordinator),
):
    try:
        await coordinator.run_design(selection)
    except StageBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _session_response(session_id, coordinator)


@router.post("/{session_id}/breakdown", response_model=SessionResponse)
async def run_breakdown(session_id: str, coordinator: PipelineCoordinator = Depends(get_coordinator)):
    try:
        await coordinator.run_breakdown()
    except (PreconditionError, StageBusyError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _session_response(session_id, coordinator)


@router.post("/{session_id}/topview", response_model=SessionResponse)
async def run_top_view(session_id: str, coordinator: PipelineCoordinator = Depends(get_coordinator)):
    try:
        await coordinator.run_top_view()
    except (PreconditionError, StageBusyError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _session_response(session_id, coordinator)
