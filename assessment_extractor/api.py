"""FastAPI interface for assessment PDF extraction"""
from fastapi import FastAPI, HTTPException, UploadFile, File
from typing import List, Dict, Optional
from pydantic import BaseModel
from pathlib import Path
import logging
from .config import API_HOST, API_PORT, REMEDIATION_SUGGESTIONS, configure_logging
from .errors import ExtractionError
from .extractor import AssessmentExtractor
from .import_selector import ImportSelector

logger = logging.getLogger(__name__)

app = FastAPI(title="Assessment Extractor API", version="1.0.0")


class ExtractionRequestItem(BaseModel):
    """Single extraction request item"""
    pdf_path: str


class TextExtractionRequest(BaseModel):
    """Already reconstructed document text"""
    text: str
    min_confidence: Optional[float] = None


# Initialize extractor
extractor = None
selector = ImportSelector()


@app.on_event("startup")
async def startup_event():
    """Initialize extractor on startup"""
    global extractor
    configure_logging()
    extractor = AssessmentExtractor()


def _require_extractor() -> AssessmentExtractor:
    if extractor is None:
        raise HTTPException(status_code=500, detail="Extractor not initialized")
    return extractor


def _failure(error: str) -> Dict:
    return {
        "record": None,
        "selection": {},
        "success": False,
        "error": error,
        "suggestions": list(REMEDIATION_SUGGESTIONS),
    }


def _response(outcome, import_selector: ImportSelector = None) -> Dict:
    """Shape a mapping outcome as a response body"""
    record = outcome.to_dict()
    if outcome.failed:
        response = _failure(outcome.reason)
        response["record"] = record
        return response
    return {
        "record": record,
        "selection": (import_selector or selector).select(record),
        "success": True,
    }


def _resolve_pdf_path(raw_path: str) -> Path:
    pdf_path = Path(raw_path)
    if not pdf_path.is_absolute() and not pdf_path.exists():
        cwd_path = Path.cwd() / pdf_path
        if cwd_path.exists():
            pdf_path = cwd_path
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF file not found: {raw_path}")
    return pdf_path


@app.post("/extract")
async def extract_from_requests(request: List[ExtractionRequestItem]):
    """
    Extract assessment sections from PDFs on disk.

    Accepts an array of requests, each containing:
    - pdf_path: Path to the PDF file (absolute, or relative to the working directory)

    Returns an array of extraction results.
    """
    active_extractor = _require_extractor()
    results = []

    for item in request:
        try:
            pdf_path = _resolve_pdf_path(item.pdf_path)
            with open(pdf_path, 'rb') as f:
                pdf_bytes = f.read()

            response = _response(active_extractor.extract(pdf_bytes))
            response["pdf_path"] = str(pdf_path)

        except FileNotFoundError as e:
            response = _failure(str(e))
            response["pdf_path"] = item.pdf_path
        except ExtractionError as e:
            logger.warning("Extraction of %s failed: %s", item.pdf_path, e)
            response = _failure(f"Error processing PDF: {e}")
            response["pdf_path"] = item.pdf_path

        results.append(response)

    return results


@app.post("/extract-upload")
async def extract_from_upload(pdf_file: UploadFile = File(...)):
    """
    Extract assessment sections from an uploaded PDF file.

    Returns the mapped record and the per-section import selection.
    """
    active_extractor = _require_extractor()
    try:
        pdf_bytes = await pdf_file.read()
        response = _response(active_extractor.extract(pdf_bytes))
    except ExtractionError as e:
        logger.warning("Extraction of %s failed: %s", pdf_file.filename, e)
        response = _failure(f"Error processing PDF: {e}")

    response["filename"] = pdf_file.filename
    return response


@app.post("/extract-batch")
async def extract_from_batch_upload(pdf_files: List[UploadFile] = File(...)):
    """
    Extract assessment sections from multiple uploaded PDF files.

    Accepts:
    - pdf_files: Uploaded PDF files (sent as multiple files with field name "pdf_files")

    Returns array of extraction results.
    """
    active_extractor = _require_extractor()
    if len(pdf_files) == 0:
        raise HTTPException(status_code=400, detail="At least one PDF file is required")

    results = []
    for i, pdf_file in enumerate(pdf_files):
        try:
            pdf_bytes = await pdf_file.read()
            response = _response(active_extractor.extract(pdf_bytes))
        except ExtractionError as e:
            logger.warning("Extraction of %s failed: %s", pdf_file.filename, e)
            response = _failure(f"Error processing PDF: {e}")

        response["filename"] = pdf_file.filename
        response["index"] = i
        results.append(response)

    return results


@app.post("/extract-text")
async def extract_from_text(request: TextExtractionRequest):
    """Run section matching on already reconstructed text, skipping PDF rendering"""
    active_extractor = _require_extractor()
    import_selector = None
    if request.min_confidence is not None:
        if not 0.0 <= request.min_confidence <= 1.0:
            raise HTTPException(status_code=400, detail="min_confidence must be between 0 and 1")
        import_selector = ImportSelector(threshold=request.min_confidence)
    return _response(active_extractor.extract_from_text(request.text), import_selector)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "extractor_initialized": extractor is not None
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
