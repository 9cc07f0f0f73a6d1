"""Batch upload of source packages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from burp.client import SessionClient
from burp.exceptions import UploadError
from burp.models import UploadOutcome

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcomes of a batch, in input order. The first failure decides the status."""

    outcomes: list[UploadOutcome] = field(default_factory=list)
    first_failure: UploadOutcome | None = None

    def add(self, outcome: UploadOutcome) -> None:
        self.outcomes.append(outcome)
        if not outcome.success and self.first_failure is None:
            self.first_failure = outcome

    @property
    def success(self) -> bool:
        return self.first_failure is None

    @property
    def exit_status(self) -> int:
        return 0 if self.first_failure is None else self.first_failure.status


class UploadOrchestrator:
    """Upload every target in order without stopping on failures."""

    def __init__(
        self,
        session: SessionClient,
        category_id: str | None = None,
        *,
        on_outcome: Callable[[UploadOutcome], None] | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            session: Authenticated session used for every upload
            category_id: Catalog id assigned to each package, or None
            on_outcome: Called with each outcome as soon as it is known
        """
        self._session = session
        self._category_id = category_id
        self._on_outcome = on_outcome

    def upload_one(self, path: Path) -> UploadOutcome:
        """Upload a single target and describe what happened."""
        try:
            self._session.upload(path, self._category_id)
        except UploadError as e:
            logger.error(f"Upload of {path} failed: {e}")
            return UploadOutcome(path=path, success=False, error=str(e), status=e.status)
        return UploadOutcome(path=path, success=True)

    def run(self, targets: Iterable[Path | str]) -> BatchResult:
        """Upload all targets sequentially.

        Returns:
            BatchResult with one outcome per target
        """
        result = BatchResult()
        for target in targets:
            outcome = self.upload_one(Path(target))
            result.add(outcome)
            if self._on_outcome is not None:
                self._on_outcome(outcome)
        return result
