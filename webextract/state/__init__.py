from .models import ExtractionState
from .registry import ExtractionStateRegistry

__all__ = ["ExtractionState", "ExtractionStateRegistry"]
