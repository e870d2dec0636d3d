from .base import BaseExtractor, Extractor, ProgressCallback
from .company import CompanyProductExtractor

__all__ = ["BaseExtractor", "CompanyProductExtractor", "Extractor", "ProgressCallback"]
