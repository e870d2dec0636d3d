from abc import ABC, abstractmethod
from collections.abc import Callable
import logging

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

ProgressCallback = Callable[[int, str], None]
Extractor = Callable[[str, dict, str | None, ProgressCallback | None], dict | None]


class BaseExtractor(ABC):
    def __init__(self, config_loader: dict | None = None):
        self.config_loader = config_loader or {}

    @abstractmethod
    def extract(
        self,
        url: str,
        config: dict,
        extraction_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> dict | None: ...

    def report(self, progress: ProgressCallback | None, percent: int, stage: str):
        if progress is not None:
            progress(percent, stage)

    def __call__(
        self,
        url: str,
        config_loader: dict | None = None,
        extraction_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> dict | None:
        config = {**self.config_loader, **(config_loader or {})}
        logger.debug(f"Running {type(self).__name__} on {url}")
        return self.extract(url, config, extraction_id=extraction_id, progress=progress)
