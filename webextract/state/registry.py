import logging
from collections.abc import Iterator

from webextract.state.models import ExtractionState

logger = logging.getLogger(__name__)


class ExtractionStateRegistry:
    """
    In-memory progress records of running extractions, keyed by extraction id.

    The registry is owned by whoever runs extractions and handed to the
    workflow explicitly. Records do not survive a process restart.
    """

    def __init__(self):
        self._states: dict[str, ExtractionState] = {}

    def __contains__(self, extraction_id: str) -> bool:
        return extraction_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._states))

    def start(self, extraction_id: str, url: str | None) -> ExtractionState:
        # Unvalidated input may not be a string yet.
        state = ExtractionState(url=url if isinstance(url, str) else None)
        self._states[extraction_id] = state
        logger.debug(f"Tracking extraction {extraction_id} for {url}")
        return state

    def get(self, extraction_id: str | None) -> ExtractionState | None:
        if extraction_id is None:
            return None
        return self._states.get(extraction_id)

    def update_progress(
        self, extraction_id: str | None, progress: int, stage: str
    ) -> ExtractionState | None:
        state = self.get(extraction_id)
        if state is None:
            return None
        state.progress = max(0, min(100, int(progress)))
        state.stage = stage
        logger.debug(f"Extraction {extraction_id}: {state.progress}% {stage}")
        return state

    def _set_flags(self, extraction_id: str, **flags) -> bool:
        state = self.get(extraction_id)
        if state is None:
            return False
        for flag, value in flags.items():
            setattr(state, flag, value)
        return True

    def pause(self, extraction_id: str) -> bool:
        return self._set_flags(extraction_id, paused=True)

    def resume(self, extraction_id: str) -> bool:
        return self._set_flags(extraction_id, paused=False)

    def stop(self, extraction_id: str) -> bool:
        return self._set_flags(extraction_id, stopped=True, paused=False)

    def remove(self, extraction_id: str | None) -> bool:
        if extraction_id is None:
            return False
        return self._states.pop(extraction_id, None) is not None
