import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from candle_dash.api.routes import router as api_router
from candle_dash.errors import (
    ConfigurationError,
    DashboardError,
    DataSourceError,
    EmptyDatasetError,
    InvalidSelectionError,
)
from candle_dash.session import ERROR_ACTIONS
from candle_dash.state import provider, session, settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("candle_dash")

app = FastAPI(title="Candle Dashboard API", version="0.1.0")
app.include_router(api_router)


def _status_for(exc: DashboardError) -> int:
    if isinstance(exc, InvalidSelectionError):
        return 422
    if isinstance(exc, ConfigurationError):
        return 503
    if isinstance(exc, DataSourceError):
        return 502
    if isinstance(exc, EmptyDatasetError):
        return 409
    return 500


@app.exception_handler(DashboardError)
async def _dashboard_error(request: Request, exc: DashboardError):
    actions = list(ERROR_ACTIONS) if isinstance(exc, DataSourceError) else []
    if isinstance(exc, DataSourceError):
        log.error("Request failed path=%s error=%s", request.url.path, repr(exc))
    return JSONResponse(status_code=_status_for(exc), content={"error": str(exc), "actions": actions})


@app.on_event("startup")
async def _startup():
    # Load the default selection so the first GET /api/dashboard has data.
    await run_in_threadpool(session.load)


@app.on_event("shutdown")
async def _shutdown():
    provider.close()


@app.get("/health")
def health():
    return {
        "status": "ok",
        "app_env": settings.app_env,
        "data_mode": settings.data_mode,
        "provider_loaded": provider.__class__.__name__,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
