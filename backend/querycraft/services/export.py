import json
from typing import Any, Dict, List

from fastapi.encoders import jsonable_encoder

from ..core.errors import UnsupportedExportFormat

MEDIA_TYPES = {"csv": "text/csv", "json": "application/json"}

def _csv_field(value: Any) -> str:
    # Strings are always quoted; null is an empty unquoted field.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    return str(jsonable_encoder(value))

def to_csv(rows: List[Dict[str, Any]]) -> str:
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(_csv_field(row.get(h)) for h in headers))
    return "\n".join(lines)

def to_json(rows: List[Dict[str, Any]]) -> str:
    return json.dumps(jsonable_encoder(rows))

def render_export(fmt: str, rows: List[Dict[str, Any]]) -> str:
    if fmt == "csv":
        return to_csv(rows)
    if fmt == "json":
        return to_json(rows)
    raise UnsupportedExportFormat(fmt)
