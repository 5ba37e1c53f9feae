"""JSON-file persistence for user-submitted issue reports.

Reports expire ``ttl`` after creation. Storage failures never raise: reads
return an empty list and writes are dropped, so callers must tolerate an
empty report set at any time. A file that cannot be fully parsed is never
rewritten, and writes replace the file atomically.
"""

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from ..models import IssueReport, IssueType

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=48)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DeletionPolicy(Protocol):
    def can_delete(self, report: IssueReport, requester_id: Optional[str]) -> bool: ...


class AllowAllDeletions:
    """Any caller may delete any report."""

    def can_delete(self, report: IssueReport, requester_id: Optional[str]) -> bool:
        return True


class OwnerOnlyDeletions:
    """Only the submitting user may delete a report; unowned reports are open."""

    def can_delete(self, report: IssueReport, requester_id: Optional[str]) -> bool:
        return report.owner_id is None or report.owner_id == requester_id


class IssueReportStore:
    def __init__(
        self,
        path: Path,
        ttl: Optional[timedelta] = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
        policy: Optional[DeletionPolicy] = None,
    ):
        self.path = Path(path)
        self.ttl = ttl
        self.clock = clock
        self.policy = policy or AllowAllDeletions()

    def _read(self, strict: bool = False) -> Optional[list[IssueReport]]:
        """Load stored reports, or ``None`` when the file cannot be trusted.

        Malformed records are skipped unless ``strict``, in which case any
        malformed record makes the whole file unusable. Writers read
        strictly so a rewrite never drops records it failed to parse.
        """
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read report store %s: %s", self.path, exc)
            return None
        if not isinstance(raw, list):
            logger.warning("Report store %s is not a list, ignoring it", self.path)
            return None
        reports = []
        for item in raw:
            try:
                reports.append(IssueReport.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed report in %s: %s", self.path, exc)
                if strict:
                    return None
        return reports

    def _write(self, reports: list[IssueReport]) -> bool:
        payload = json.dumps([r.model_dump(mode="json") for r in reports], indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
            ) as f:
                tmp_path = f.name
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("Could not write report store %s: %s", self.path, exc)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            return False
        return True

    def _read_for_update(self) -> Optional[list[IssueReport]]:
        reports = self._read(strict=True)
        if reports is None:
            logger.warning("Report store %s is unreadable, dropping write", self.path)
        return reports

    def all(self) -> list[IssueReport]:
        """Every stored report, including expired ones."""
        return self._read() or []

    def list(self, now: Optional[datetime] = None) -> list[IssueReport]:
        """Reports that have not expired at ``now``."""
        now = now or self.clock()
        return [r for r in self._read() or [] if r.is_active(now)]

    def create(
        self,
        lat: float,
        lng: float,
        type: IssueType | str,
        description: str,
        photo_url: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> Optional[IssueReport]:
        """Validate and persist a new report.

        Raises ``ValidationError`` for invalid input. Returns ``None`` when the
        report could not be written.
        """
        created_at = self.clock()
        report = IssueReport(
            id=uuid.uuid4().hex[:12],
            lat=lat,
            lng=lng,
            type=type,
            description=description,
            photo_url=photo_url,
            owner_id=owner_id,
            created_at=created_at,
            expires_at=created_at + self.ttl if self.ttl is not None else None,
        )
        reports = self._read_for_update()
        if reports is None:
            return None
        reports.append(report)
        if not self._write(reports):
            return None
        logger.info("Report %s created (%s)", report.id, report.type.value)
        return report

    def delete(self, report_id: str, requester_id: Optional[str] = None) -> bool:
        reports = self._read_for_update()
        if reports is None:
            return False
        target = next((r for r in reports if r.id == report_id), None)
        if target is None:
            return False
        if not self.policy.can_delete(target, requester_id):
            logger.info("Deletion of report %s refused for %r", report_id, requester_id)
            return False
        if not self._write([r for r in reports if r.id != report_id]):
            return False
        logger.info("Report %s deleted", report_id)
        return True

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        now = now or self.clock()
        reports = self._read_for_update()
        if reports is None:
            return 0
        active =[r for r in reports if r.is_active(now)]
        removed = len(reports) - len(active)
        if removed and not self._write(active):
            return 0
        return removed
