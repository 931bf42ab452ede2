import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

def describe_schema(engine: Engine) -> str:
    """Render every table as a CREATE TABLE statement for the translation prompt."""
    try:
        inspector = inspect(engine)
        blocks = []
        for table in inspector.get_table_names():
            pk = set(inspector.get_pk_constraint(table).get("constrained_columns") or [])
            lines = []
            for col in inspector.get_columns(table):
                line = f"  {col['name']} {col['type']}"
                if not col.get("nullable", True):
                    line += " NOT NULL"
                if col["name"] in pk:
                    line += " PRIMARY KEY"
                lines.append(line)
            blocks.append(f"\nCREATE TABLE {table} (\n" + ",\n".join(lines) + "\n);\n")
        return "".join(blocks)
    except Exception as e:
        logger.error("Schema introspection failed: %s", e)
        return ""
