# sanitizr/server.py
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask
from pathlib import Path
import logging
import shutil
import tempfile

from sanitizr.engine import AUTO, sanitize
from sanitizr.models import Category
from sanitizr.settings import MAX_FILE_SIZE
from sanitizr.utils.filetypes import SUPPORTED_FILE_TYPES, classify

log = logging.getLogger(__name__)

app = FastAPI(title="Sanitizr Metadata Remover")


def _secure_name(filename: str | None) -> str:
    # Drop any directory part the client sent
    name = Path(filename or "").name
    return "" if name in {".", ".."} else name


async def _validate_and_read(upload: UploadFile, category: str) -> bytes:
    name = _secure_name(upload.filename)
    if not name:
        raise HTTPException(status_code=400, detail="Missing file name.")
    if category.lower() == AUTO and classify(name) is Category.UNKNOWN:
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {Path(name).suffix or name}")

    data = await upload.read()
    if len(data) > MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail=f"File too large. Limit is {MAX_FILE_SIZE} bytes.")
    return data


@app.get("/categories")
def categories():
    return {category.value: list(exts) for category, exts in SUPPORTED_FILE_TYPES.items()}


@app.post("/sanitize")
async def sanitize_upload(upload: UploadFile = File(...), category: str = Form(AUTO)):
    data = await _validate_and_read(upload, category)

    workdir = Path(tempfile.mkdtemp(prefix="sanitizr-"))
    path = workdir / _secure_name(upload.filename)
    try:
        path.write_bytes(data)
        result = await run_in_threadpool(sanitize, path, category)
    except Exception:
        shutil.rmtree(workdir, ignore_errors=True)
        raise

    if not result.succeeded:
        shutil.rmtree(workdir, ignore_errors=True)
        log.warning("Sanitizing upload %s failed: %s", path.name, result.detail)
        raise HTTPException(
            status_code=422,
            detail={"failure": result.failure.value, "detail": result.detail},
        )

    return FileResponse(
        path,
        media_type="application/octet-stream",
        filename=path.name,
        headers={
            "X-Sanitizr-Category": result.strategy_applied.value,
            "X-Sanitizr-Stubbed": str(result.is_stubbed_noop).lower(),
        },
        background=BackgroundTask(shutil.rmtree, workdir, ignore_errors=True),
    )
