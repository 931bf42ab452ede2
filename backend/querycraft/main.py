import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import settings
from .core.log import configure_logging
from .db.sample import seed_sample_data
from .db.session import data_engine, init_db
from .api.v1 import database, health, queries, query, visualizations

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(query.router, prefix=settings.API_PREFIX)
app.include_router(queries.router, prefix=settings.API_PREFIX)
app.include_router(visualizations.router, prefix=settings.API_PREFIX)
app.include_router(database.router, prefix=settings.API_PREFIX)

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})

@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})

@app.on_event("startup")
def on_startup():
    configure_logging()
    init_db()
    if settings.SEED_SAMPLE_DATA:
        seed_sample_data(data_engine)
