"""Request, operation and outcome types for raw data anonymization."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class AnonymizationRequest:
    """Parsed parameters of one anonymization run."""

    date: str
    id_sites: Optional[FrozenSet[int]] = None
    visit_columns: Tuple[str, ...] = ()
    action_columns: Tuple[str, ...] = ()
    anonymize_ip: bool = False
    anonymize_location: bool = False
    non_interactive: bool = False

    def __post_init__(self):
        if self.id_sites is not None:
            invalid = [site for site in self.id_sites if not isinstance(site, int) or site < 1]
            if invalid:
                raise ValueError(f"Site ids must be positive integers, got {sorted(map(str, invalid))}")
            object.__setattr__(self, 'id_sites', frozenset(self.id_sites))
        object.__setattr__(self, 'visit_columns', tuple(dict.fromkeys(self.visit_columns)))
        object.__setattr__(self, 'action_columns', tuple(dict.fromkeys(self.action_columns)))


class OutcomeKind(Enum):
    NO_OP = 'no-op'
    SKIPPED = 'skipped'
    APPLIED = 'applied'


@dataclass(frozen=True)
class OperationOutcome:
    """What happened to one operation of a run."""

    name: str
    kind: OutcomeKind
    rows_affected: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def no_op(cls, name: str) -> 'OperationOutcome':
        return cls(name, OutcomeKind.NO_OP)

    @classmethod
    def skipped(cls, name: str, reason: str = 'declined by operator') -> 'OperationOutcome':
        return cls(name, OutcomeKind.SKIPPED, reason=reason)

    @classmethod
    def applied(cls, name: str, rows_affected: int) -> 'OperationOutcome':
        return cls(name, OutcomeKind.APPLIED, rows_affected=rows_affected)


@dataclass(frozen=True)
class AnonymizationOperation:
    """
    One independently confirmed step of a run.

    ``requested`` is False when the operator supplied no input for the
    step; such a step is reported as a no-op and never prompts.
    """

    name: str
    description: str
    requested: bool
    apply: Callable[[], int] = field(repr=False)
    start_message: str
    applied_message: str
    skipped_message: str
    no_op_message: str
