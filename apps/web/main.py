"""FastAPI web application for minver."""

import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from core.errors import FetchDependenciesError, ManifestError
from core.manifest import MANIFEST_NAME, minimize_manifest
from core.models import DependencyGroup, MinimizeReport

logger = logging.getLogger(__name__)

app = FastAPI(
    title="minver",
    description="Rewrite Cargo dependency pins to their minimal compatible versions",
    version="0.1.0",
)


class MinimizeRequest(BaseModel):
    """Request model for minimizing a manifest."""
    content: str
    group: str = DependencyGroup.STANDARD.table_name


class MinimizeResponse(BaseModel):
    """Response model for a minimized manifest."""
    original_content: str
    updated_content: str
    diff: str
    changes: list[dict]
    has_changes: bool
    group: str


@app.post("/api/minimize", response_model=MinimizeResponse)
async def minimize_dependencies(request: MinimizeRequest):
    """Minimize dependency versions in manifest text."""
    report = _run_minimize(request)
    changes = [
        {
            "name": result.name,
            "original": str(result.original),
            "minimized": str(result.minimized),
            "changed": result.changed,
        }
        for result in report.changes
    ]

    return MinimizeResponse(
        original_content=report.original_content,
        updated_content=report.updated_content,
        diff=report.diff,
        changes=changes,
        has_changes=report.has_changes,
        group=report.group.table_name,
    )


@app.post("/api/upload", response_model=MinimizeResponse)
async def upload_file(
    file: UploadFile = File(...),
    group: str = Form(DependencyGroup.STANDARD.table_name),
):
    """Upload and minimize a Cargo.toml file."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await file.read()
    try:
        text_content = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be valid UTF-8 text")

    return await minimize_dependencies(MinimizeRequest(content=text_content, group=group))


@app.post("/api/download")
async def download_updated_file(request: MinimizeRequest):
    """Return the minimized manifest as a file attachment."""
    report = _run_minimize(request)
    if not report.has_changes:
        raise HTTPException(status_code=400, detail="No changes to download")

    return Response(
        content=report.updated_content,
        media_type="application/toml",
        headers={"Content-Disposition": f'attachment; filename="{MANIFEST_NAME}"'},
    )


def _run_minimize(request: MinimizeRequest) -> MinimizeReport:
    """Run the minimizer, mapping failures onto HTTP errors."""
    if not request.content.strip():
        raise HTTPException(status_code=400, detail="No content provided")

    try:
        group = DependencyGroup.from_name(request.group)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return minimize_manifest(request.content, group)
    except (FetchDependenciesError, ManifestError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected failure minimizing manifest")
        raise HTTPException(status_code=500, detail=f"Error processing manifest: {str(e)}")
