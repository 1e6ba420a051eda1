"""Submission state shared by the ticket and VIP booking sessions.

A session owns the user's in-progress input and walks
``idle -> submitting -> idle``. Each submit returns a ``SubmissionOutcome``
for the caller to display; nothing is pushed to a global notifier.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from ticketing.domain import ContactInfo
from ticketing.domain.errors import ErrorCode


class SubmissionState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class SubmissionStatus(Enum):
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"
    FAILED = "failed"
    IGNORED = "ignored"
    DISCARDED = "discarded"


class NoticeLevel(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.ERROR, message=message)


@dataclass(frozen=True)
class SubmissionOutcome:
    status: SubmissionStatus
    notice: Notice | None = None
    reservation_code: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error_code: ErrorCode | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is SubmissionStatus.SUCCEEDED


IGNORED = SubmissionOutcome(status=SubmissionStatus.IGNORED)
DISCARDED = SubmissionOutcome(status=SubmissionStatus.DISCARDED)


class BookingSessionBase:
    """Contact form, field errors and the non-reentrant submission guard."""

    def __init__(self) -> None:
        self.contact = ContactInfo()
        self.special_requests = ""
        self.errors: dict[str, str] = {}
        self.state = SubmissionState.IDLE
        self._closed = False

    @property
    def is_submitting(self) -> bool:
        return self.state is SubmissionState.SUBMITTING

    @property
    def is_closed(self) -> bool:
        return self._closed

    def update_contact(self, **fields: str) -> ContactInfo:
        self.contact = replace(self.contact, **fields)
        return self.contact

    def set_special_requests(self, text: str) -> None:
        self.special_requests = text

    def close(self) -> None:
        """End the session. A response still in flight will be discarded."""
        self._closed = True

    def _reset_form(self) -> None:
        self.contact = ContactInfo()
        self.special_requests = ""
        self.errors = {}

    def _rejected(
        self, code: ErrorCode, message: str | None = None, errors: dict[str, str] | None = None
    ) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=SubmissionStatus.REJECTED,
            notice=Notice.error(message) if message else None,
            errors=dict(errors or {}),
            error_code=code,
        )

    def _failed(self, message: str) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=SubmissionStatus.FAILED,
            notice=Notice.error(message),
            error_code=ErrorCode.SUBMISSION_FAILED,
        )
