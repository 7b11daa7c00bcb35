"""Configuration settings for the assessment extractor"""
import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Text reconstruction tolerances (PDF layout units)
LINE_BREAK_THRESHOLD = 5.0  # Vertical delta that starts a new line
WORD_GAP_THRESHOLD = 5.0    # Horizontal gap that inserts a space

# Confidence bands, checked top-down: score >= lower bound -> label
CONFIDENCE_BANDS = [
    (0.8, "high"),
    (0.6, "good"),
    (0.4, "medium"),
    (0.0, "low"),
]

# Sections at or above this confidence are pre-selected for import
PRESELECT_THRESHOLD = 0.6

# Failure reasons
NO_TEXT_REASON = "No extractable text found in document"
NO_STRUCTURE_REASON = "No recognizable section structure found in document"
NO_VALID_DATA_REASON = "No valid data could be extracted from this document format"

REMEDIATION_SUGGESTIONS = [
    "Try a different document",
    "Make sure the PDF contains selectable text (not only scanned images)",
    "Run OCR on scanned documents before importing",
]

# Logging
LOG_LEVEL = os.getenv("ASSESSMENT_EXTRACTOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def configure_logging(level: str = None):
    """Configure root logging for the CLI and API entry points"""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
