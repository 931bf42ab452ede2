from typing import Any, Optional
from .common import CamelModel

class DatabaseConnection(CamelModel):
    id: str
    name: str
    type: str
    connection_string: str
    is_active: bool

class SchemaOut(CamelModel):
    schema_text: str

class ExportRequest(CamelModel):
    data: Any = None
    filename: Optional[str] = None
