"""Clinical assessment PDF extraction: text reconstruction, section matching and domain mapping"""
from .errors import ExtractionCancelled, ExtractionError, RenderAccessError
from .extractor import AssessmentExtractor
from .import_selector import ImportSelector
from .models import DomainRecord, ExtractionFailure, ExtractionResult
from .pipeline import ExtractionPipeline

__version__ = "0.1.0"

__all__ = [
    "AssessmentExtractor",
    "DomainRecord",
    "ExtractionCancelled",
    "ExtractionError",
    "ExtractionFailure",
    "ExtractionPipeline",
    "ExtractionResult",
    "ImportSelector",
    "RenderAccessError",
]
