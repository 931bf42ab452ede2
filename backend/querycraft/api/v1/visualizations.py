from typing import List
from fastapi import APIRouter, Depends, HTTPException
from ...db.models import Visualization
from ...db.storage import QueryStorage
from ...schemas.common import SuccessOut
from ...schemas.query import QueryOut
from ...schemas.visualization import SharedVisualization, VisualizationIn, VisualizationOut
from ..deps import get_storage

router = APIRouter()

@router.post("/visualizations", response_model=VisualizationOut)
def create(body: VisualizationIn, storage: QueryStorage = Depends(get_storage)):
    return storage.create_visualization(Visualization(**body.model_dump()))

@router.get("/visualizations/query/{query_id}", response_model=List[VisualizationOut])
def list_for_query(query_id: str, storage: QueryStorage = Depends(get_storage)):
    return storage.list_visualizations_for_query(query_id)

@router.get("/visualizations/{viz_id}", response_model=VisualizationOut)
def get_one(viz_id: str, storage: QueryStorage = Depends(get_storage)):
    viz = storage.get_visualization(viz_id)
    if viz is None:
        raise HTTPException(status_code=404, detail="Visualization not found")
    return viz

@router.delete("/visualizations/{viz_id}", response_model=SuccessOut)
def delete(viz_id: str, storage: QueryStorage = Depends(get_storage)):
    if not storage.delete_visualization(viz_id):
        raise HTTPException(status_code=404, detail="Visualization not found")
    return SuccessOut()

@router.get("/share/{shareable_id}", response_model=SharedVisualization)
def shared(shareable_id: str, storage: QueryStorage = Depends(get_storage)):
    viz = storage.get_visualization_by_shareable_id(shareable_id)
    if viz is None:
        raise HTTPException(status_code=404, detail="Shared visualization not found")
    query = storage.get_query(viz.query_id)
    return SharedVisualization(
        visualization=VisualizationOut.model_validate(viz),
        query=QueryOut.model_validate(query) if query is not None else None,
    )
