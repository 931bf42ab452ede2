from sqlalchemy.engine import make_url

from ..core.config import settings
from ..schemas.database import DatabaseConnection

def get_active_connection() -> DatabaseConnection:
    """Describe the database the executor runs queries against."""
    url = make_url(settings.DATA_DATABASE_URL)
    backend = url.get_backend_name()
    name = url.database or "in-memory"
    return DatabaseConnection(
        id=f"{backend}-main",
        name=f"{backend.capitalize()} Database ({name})",
        type=backend,
        connection_string=url.render_as_string(hide_password=True),
        is_active=True,
    )
