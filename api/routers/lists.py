from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from api.domain.models import ListCreate, ListPatch
from api.routers.validation import require_json
from api.services.list_service import ListService

router = APIRouter(prefix="/lists", tags=["lists"])


def _get_list_service(request: Request) -> ListService:
    svc = getattr(getattr(request.app, "state", None), "list_service", None)
    if not svc:
        raise RuntimeError("ListService not configured")
    return svc


@router.get("")
def get_all_lists(request: Request):
    svc = _get_list_service(request)
    return [todo_list.to_document() for todo_list in svc.all()]


@router.get("/{list_id}")
def get_list(list_id: str, request: Request):
    return _get_list_service(request).get(list_id).to_document()


@router.get("/{list_id}/entries")
def get_list_with_entries(list_id: str, request: Request):
    bundle = _get_list_service(request).get_with_entries(list_id)
    return bundle.model_dump(mode="json", by_alias=True)


@router.post("", dependencies=[Depends(require_json)])
def post_list(payload: ListCreate, request: Request):
    todo_list = _get_list_service(request).create(payload.name)
    return JSONResponse(status_code=201, content=todo_list.to_document())


@router.patch("/{list_id}", dependencies=[Depends(require_json)])
def patch_list(list_id: str, payload: ListPatch, request: Request):
    return _get_list_service(request).patch(list_id, name=payload.name).to_document()


@router.delete("/{list_id}")
def delete_list(list_id: str, request: Request):
    _get_list_service(request).delete(list_id)
    return Response(status_code=204)
