"""Domain models for form filler application."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FieldKind(str, Enum):
    """Behavioral category of a form field."""
    TEXT_FIELD = "TextField"
    CHECK_BOX = "CheckBox"
    RADIO_GROUP = "RadioGroup"
    DROPDOWN = "Dropdown"
    UNSUPPORTED = "Unsupported"


@dataclass(frozen=True)
class FormField:
    """Represents one interactive field of a loaded form."""
    name: str
    kind: FieldKind
    options: List[str] = field(default_factory=list)
    page: int = 0


class OutcomeStatus(str, Enum):
    APPLIED = "Applied"
    SKIPPED = "Skipped"


@dataclass(frozen=True)
class ApplicationOutcome:
    """Result of applying one value map entry."""
    name: str
    status: OutcomeStatus
    reason: Optional[str] = None

    @classmethod
    def applied(cls, name: str) -> "ApplicationOutcome":
        return cls(name=name, status=OutcomeStatus.APPLIED)

    @classmethod
    def skipped(cls, name: str, reason: str) -> "ApplicationOutcome":
        return cls(name=name, status=OutcomeStatus.SKIPPED, reason=reason)

    @property
    def is_applied(self) -> bool:
        return self.status is OutcomeStatus.APPLIED


@dataclass
class ApplicationReport:
    """Result of applying a value map to a form."""
    outcomes: List[ApplicationOutcome] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_applied)

    @property
    def total_attempted(self) -> int:
        return len(self.outcomes)

    @property
    def skipped(self) -> List[ApplicationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.is_applied]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applied_count": self.applied_count,
            "total_attempted": self.total_attempted,
            "outcomes": [
                {
                    "name": outcome.name,
                    "status": outcome.status.value,
                    **({"reason": outcome.reason} if outcome.reason else {}),
                }
                for outcome in self.outcomes
            ],
        }


@dataclass
class BatchResult:
    """Result of processing every document of a directory."""
    processed: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def processed_count(self) -> int:
        return len(self.processed)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def success(self) -> bool:
        return len(self.failures) == 0
