from typing import List
from fastapi import APIRouter, Depends, HTTPException
from ...db.storage import QueryStorage
from ...schemas.common import SuccessOut
from ...schemas.query import ClearHistoryOut, QueryOut, QueryUpdate
from ..deps import get_storage

router = APIRouter()

@router.get("/queries", response_model=List[QueryOut])
def list_all(storage: QueryStorage = Depends(get_storage)):
    return storage.list_queries()

@router.delete("/queries", response_model=ClearHistoryOut)
def clear_history(storage: QueryStorage = Depends(get_storage)):
    return ClearHistoryOut(deleted=storage.clear_history())

@router.get("/queries/saved", response_model=List[QueryOut])
def list_saved(storage: QueryStorage = Depends(get_storage)):
    return storage.list_saved_queries()

@router.get("/queries/{query_id}", response_model=QueryOut)
def get_one(query_id: str, storage: QueryStorage = Depends(get_storage)):
    record = storage.get_query(query_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Query not found")
    return record

@router.patch("/queries/{query_id}", response_model=QueryOut)
def update(query_id: str, body: QueryUpdate, storage: QueryStorage = Depends(get_storage)):
    record = storage.update_query(query_id, body.model_dump(exclude_unset=True))
    if record is None:
        raise HTTPException(status_code=404, detail="Query not found")
    return record

@router.delete("/queries/{query_id}", response_model=SuccessOut)
def delete(query_id: str, storage: QueryStorage = Depends(get_storage)):
    if not storage.delete_query(query_id):
        raise HTTPException(status_code=404, detail="Query not found")
    return SuccessOut()
