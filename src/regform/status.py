"""Submission status — the lifecycle of one registration attempt.

``Idle → Pending → Succeeded | Failed → Idle``

Each state is a frozen dataclass so presenters can ``match`` on it::

    match snapshot.status:
        case Failed(reason=reason):
            show_error(reason)
        case Succeeded(message=message):
            show_banner(message)
"""

from dataclasses import dataclass

SUCCESS_MESSAGE = "Registration successful!"
TRANSPORT_FAILURE_MESSAGE = "An error occurred while sending the data"
REJECTED_MESSAGE = "Registration failed"


@dataclass(frozen=True, slots=True)
class Idle:
    """No submission in progress or on display."""


@dataclass(frozen=True, slots=True)
class Pending:
    """A request is in flight."""


@dataclass(frozen=True, slots=True)
class Succeeded:
    """The server accepted the registration."""

    message: str = SUCCESS_MESSAGE


@dataclass(frozen=True, slots=True)
class Failed:
    """The attempt failed; ``reason`` is shown to the user verbatim."""

    reason: str


type SubmissionStatus = Idle | Pending | Succeeded | Failed

IDLE = Idle()
PENDING = Pending()


def is_terminal(status: SubmissionStatus) -> bool:
    """True for ``Succeeded`` and ``Failed``."""
    return isinstance(status, Succeeded | Failed)
