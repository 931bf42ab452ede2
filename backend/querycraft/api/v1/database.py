from fastapi import APIRouter, Depends, HTTPException, Response
from ...core.errors import UnsupportedExportFormat
from ...schemas.database import DatabaseConnection, ExportRequest, SchemaOut
from ...services.database import get_active_connection
from ...services.executor import QueryExecutor
from ...services.export import MEDIA_TYPES, render_export
from ...services.schema_text import describe_schema
from ..deps import get_executor

router = APIRouter()

@router.get("/database/status", response_model=DatabaseConnection)
def status():
    return get_active_connection()

@router.get("/database/schema", response_model=SchemaOut)
def schema(executor: QueryExecutor = Depends(get_executor)):
    return SchemaOut(schema_text=describe_schema(executor.engine))

@router.post("/export/{fmt}")
def export(fmt: str, body: ExportRequest):
    if not isinstance(body.data, list) or not all(isinstance(row, dict) for row in body.data):
        raise HTTPException(status_code=400, detail="Data array is required")
    try:
        content = render_export(fmt, body.data)
    except UnsupportedExportFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    filename = f"{body.filename or 'export'}.{fmt}"
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
