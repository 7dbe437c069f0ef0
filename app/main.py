import logging
import re
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.opm import router as opm_router
from app.core.dependencies import get_config, get_repository
from app.domain.entities import Repository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="OPM Repository",
    version="0.1.0",
    description="Read-only HTTP repository for Odd Package Manager packages.",
)

app.add_middleware(GZipMiddleware)

# HTML templates (Jinja2)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

_REPEATED_SLASHES = re.compile(r"/+")


@app.middleware("http")
async def collapse_slashes(request: Request, call_next):
    """
    Treat `//packages///foo.opm` like `/packages/foo.opm`.
    """
    request.scope["path"] = _REPEATED_SLASHES.sub("/", request.scope["path"])
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(f"Unhandled error for {request.url.path}: {exc}", exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


@app.on_event("startup")
async def startup_event() -> None:
    config = get_config()
    logger.info(f"Serving OPM packages from {config.repo_root}")


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    """
    Landing page listing every package in the store.
    """
    packages = await repo.build_catalog()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "config": repo.config,
            "packages": packages,
        },
    )


@app.get("/health")
async def health(repo: Repository = Depends(get_repository)) -> dict:
    """
    Lightweight health check endpoint.
    """
    scan = await repo.scan_catalog()
    return {
        "status": "ok",
        "store": "available" if scan.store_available else "unavailable",
    }


app.include_router(opm_router, tags=["opm"])


if __name__ == "__main__":
    """
    Allow running `python app/main.py` to start the Uvicorn development server.
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=9000,
        reload=True,
    )
