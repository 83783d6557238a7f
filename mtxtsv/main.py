import os
import tempfile

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from .convert import EmptyInputError, header_line_count, write_tsv
from .decoding import open_upload
from .models import HeaderLinesResponse, HealthResponse
from .newlines import lines_of, open_sink
from .rules import ACCEPTED_SUFFIXES, TEXT_ENCODING

app = FastAPI(
    title="mtxtsv",
    description="MatrixMarket to TSV conversion and header detection",
    version="0.1.0",
)


def _check_filename(file: UploadFile) -> None:
    name = (file.filename or "").lower()
    if not name.endswith(ACCEPTED_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only MatrixMarket files (.mtx, .mm, .txt) are supported")


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/header-lines", response_model=HeaderLinesResponse)
def header_lines(file: UploadFile = File(...)):
    _check_filename(file)
    text, _ = open_upload(file.file)
    try:
        count = header_line_count(lines_of(text))
    except EmptyInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    finally:
        # leave the upload itself for FastAPI to close
        text.detach()
    return {"filename": file.filename, "header_lines": count}


@app.post("/convert-to-tsv")
def convert(file: UploadFile = File(...)):
    """
    Converts the upload line by line into a temporary file and streams that
    file back, so neither side of the conversion is held in memory.
    """
    _check_filename(file)
    text, detected = open_upload(file.file)

    fd, out_path = tempfile.mkstemp(suffix=".tsv")
    os.close(fd)
    try:
        with open_sink(out_path) as sink:
            rows = write_tsv(text, sink)
    except BaseException:
        os.unlink(out_path)
        raise
    finally:
        text.detach()

    stem = os.path.splitext(file.filename or "matrix")[0]
    return FileResponse(
        out_path,
        media_type=f"text/tab-separated-values; charset={TEXT_ENCODING}",
        filename=f"{stem}.tsv",
        headers={
            "X-Rows": str(rows),
            "X-Detected-Encoding": detected or "unknown",
        },
        background=BackgroundTask(os.unlink, out_path),
    )
