from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import FileResponse, PlainTextResponse

from app.core.dependencies import get_repository
from app.domain.entities import Repository
from app.domain.opm_utils import format_package_list, materialize_metadata

logger = logging.getLogger(__name__)
router = APIRouter()

# ---------------------------------------------------------------------------
# 1. GET /packages.json
# ---------------------------------------------------------------------------

@router.get("/packages.json")
async def get_package_list(repo: Repository = Depends(get_repository)) -> Response:
    """
    Machine-readable package list: one `name|version|display` line per package.
    """
    packages = await repo.build_catalog()
    return Response(content=format_package_list(packages), media_type="application/json")


# ---------------------------------------------------------------------------
# 2. GET /packages/{identifier}.opm
# ---------------------------------------------------------------------------

@router.get("/packages/{identifier}.opm")
async def get_package_metadata(
    identifier: str,
    repo: Repository = Depends(get_repository),
) -> PlainTextResponse:
    """
    Serve a metadata file with its dynamic section filled in from the
    matching archive in packagedata/.
    """
    text = await repo.load_metadata(identifier)
    if text is None:
        raise HTTPException(status_code=404, detail="Package metadata not found")

    match = await repo.resolve_artifact(identifier)
    if match is None:
        raise HTTPException(status_code=404, detail="Package data not found")

    return PlainTextResponse(materialize_metadata(text, match))


# ---------------------------------------------------------------------------
# 3. Archive download
# ---------------------------------------------------------------------------

@router.api_route("/packagedata/{file_path:path}", methods=["GET", "HEAD"])
async def download_package_data(
    file_path: str,
    repo: Repository = Depends(get_repository),
) -> FileResponse:
    path = await repo.get_download_path(file_path)
    if path is None:
        raise HTTPException(status_code=404, detail="Package data not found")

    return FileResponse(
        path=str(path),
        media_type="application/octet-stream",
        headers={"Cache-Control": f"public, max-age={repo.config.packagedata_max_age}"},
    )


# ---------------------------------------------------------------------------
# 4. Installer scripts
# ---------------------------------------------------------------------------

async def _serve_script(name: str, repo: Repository) -> PlainTextResponse:
    text = await repo.read_script(name)
    if text is None:
        raise HTTPException(status_code=404, detail="Script not found")
    return PlainTextResponse(text)


@router.get("/opminstall.sh")
async def get_install_script(repo: Repository = Depends(get_repository)) -> PlainTextResponse:
    return await _serve_script("opminstall.sh", repo)


@router.get("/opm.sh")
async def get_opm_script(repo: Repository = Depends(get_repository)) -> PlainTextResponse:
    return await _serve_script("opm.sh", repo)
