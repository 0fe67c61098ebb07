"""Per-run state: applied negatives, failures and the run log."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from crossnegatives.models.base import utc_now


@dataclass
class NegativeRecord:
    """Formatted negative keyword -> entities that received it.

    Each (keyword, entity) pair is stored once; insertion order is kept for
    both keywords and entities.
    """

    keywords: dict[str, list[str]] = field(default_factory=dict)
    entities: list[str] = field(default_factory=list)

    def add(self, literal: str, entity: str) -> bool:
        """Record that ``literal`` was added to ``entity``.

        Returns:
            False when the pair was already recorded
        """
        receivers = self.keywords.setdefault(literal, [])
        if entity not in self.entities:
            self.entities.append(entity)
        if entity in receivers:
            return False
        receivers.append(entity)
        return True

    def receivers(self, literal: str) -> list[str]:
        return list(self.keywords.get(literal, []))

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        literal, entity = pair
        return entity in self.keywords.get(literal, [])

    def __len__(self) -> int:
        return sum(len(receivers) for receivers in self.keywords.values())


@dataclass(frozen=True)
class WriteFailure:
    """A negative keyword the platform refused."""

    literal: str
    entity: str
    error: str


@dataclass
class RunContext:
    """State owned by a single propagation run."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    started_at: datetime = field(default_factory=utc_now)
    finished_at: datetime | None = None
    dry_run: bool = False
    record: NegativeRecord = field(default_factory=NegativeRecord)
    failures: list[WriteFailure] = field(default_factory=list)
    log_lines: list[str] = field(default_factory=list)
    attempted: int = 0
    skipped: int = 0
    report_url: str | None = None

    @property
    def added(self) -> int:
        return len(self.record)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def summary(self) -> dict[str, object]:
        """Counters for logging and the CLI."""
        return {
            "run_id": self.run_id,
            "dry_run": self.dry_run,
            "attempted": self.attempted,
            "added": self.added,
            "failed": self.failed,
            "skipped": self.skipped,
            "distinct_keywords": len(self.record.keywords),
            "entities": len(self.record.entities),
            "report_url": self.report_url,
        }
