from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from api.domain.models import EntryCreate, EntryPatch
from api.routers.validation import require_json
from api.services.entry_service import EntryService

router = APIRouter(prefix="/entries", tags=["entries"])


def _get_entry_service(request: Request) -> EntryService:
    svc = getattr(getattr(request.app, "state", None), "entry_service", None)
    if not svc:
        raise RuntimeError("EntryService not configured")
    return svc


@router.get("")
def get_all_entries(request: Request):
    return [entry.to_document() for entry in _get_entry_service(request).all()]


@router.get("/{entry_id}")
def get_entry(entry_id: str, request: Request):
    return _get_entry_service(request).get(entry_id).to_document()


@router.post("", dependencies=[Depends(require_json)])
def post_entry(payload: EntryCreate, request: Request):
    entry = _get_entry_service(request).create(payload.list_id, payload.name, payload.done)
    return JSONResponse(status_code=201, content=entry.to_document())


@router.patch("/{entry_id}", dependencies=[Depends(require_json)])
def patch_entry(entry_id: str, payload: EntryPatch, request: Request):
    entry = _get_entry_service(request).patch(
        entry_id,
        list_id=payload.list_id,
        name=payload.name,
        done=payload.done,
    )
    return entry.to_document()


@router.delete("/{entry_id}")
def delete_entry(entry_id: str, request: Request):
    _get_entry_service(request).delete(entry_id)
    return Response(status_code=204)
