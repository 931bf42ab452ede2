from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, Field
from ..db.models import ChartType
from .common import CamelModel
from .query import QueryOut

class VisualizationIn(CamelModel):
    query_id: str
    chart_type: ChartType
    x_axis: str
    y_axis: str
    title: str
    width: int = Field(default=800, gt=0)
    height: int = Field(default=400, gt=0)

class VisualizationOut(VisualizationIn):
    model_config = ConfigDict(from_attributes=True)

    id: str
    shareable_id: str
    created_at: datetime

class SharedVisualization(CamelModel):
    visualization: VisualizationOut
    query: Optional[QueryOut] = None
