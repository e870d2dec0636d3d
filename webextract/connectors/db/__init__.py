from webextract.schemas.extractions.schema import ExtractionRecord
from webextract.schemas.operation_logs.schema import OperationLog

__all__ = ["ExtractionRecord", "OperationLog"]
