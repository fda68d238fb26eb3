"""Page digester: turns raw HTML into a structured, immutable digest."""

from .engine.errors import DigestError, EmptyInputError
from .engine.index import analyze_page
from .engine.types import AnalysisResult

__all__ = ["AnalysisResult", "DigestError", "EmptyInputError", "analyze_page"]
