"""Exceptions raised by the extraction pipeline"""


class ExtractionError(Exception):
    """Base class for extraction errors"""


class RenderAccessError(ExtractionError):
    """The PDF could not be opened or parsed by any renderer"""


class ExtractionCancelled(ExtractionError):
    """The caller cancelled a multi-page extraction between pages"""
