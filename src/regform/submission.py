"""Submission controller — drive one registration attempt through its lifecycle.

``submit()`` is gated on the store's latest validity. An invalid form is
not an error: the attempt is dropped silently, as a disabled submit
button would drop it. Outcomes of an attempt:

- transport failure → ``Failed("An error occurred while sending the data")``
- non-2xx response → ``Failed(<server message> or "Registration failed")``
- 2xx response → ``Succeeded``, then the form is reset

Nothing is retried automatically.
"""

import asyncio
import logging
from typing import Protocol

from regform.errors import TransportError
from regform.fields import to_payload
from regform.status import (
    IDLE,
    PENDING,
    REJECTED_MESSAGE,
    TRANSPORT_FAILURE_MESSAGE,
    Failed,
    Pending,
    SubmissionStatus,
    Succeeded,
    is_terminal,
)
from regform.store import FormStore
from regform.transport import TransportResponse

logger = logging.getLogger("regform.submission")


class Transport(Protocol):
    """Anything that can deliver a registration payload."""

    async def send(self, payload: dict[str, object]) -> TransportResponse: ...


class SubmissionController:
    """Submits the store's values and records the outcome in the store."""

    __slots__ = ("_store", "_transport")

    def __init__(self, store: FormStore, transport: Transport) -> None:
        self._store = store
        self._transport = transport

    async def submit(self) -> SubmissionStatus:
        """Attempt a submission. Returns the resulting status.

        No-op (returns the unchanged status) when the form is invalid or
        a submission is already pending.
        """
        snapshot = self._store.snapshot
        if not snapshot.is_valid:
            logger.debug("submit ignored: form is invalid")
            return snapshot.status
        if isinstance(snapshot.status, Pending):
            logger.debug("submit ignored: a submission is already pending")
            return snapshot.status

        self._store.set_status(PENDING)
        try:
            response = await self._transport.send(to_payload(snapshot.data))
        except TransportError as exc:
            logger.warning("registration not sent: %s", exc)
            status: SubmissionStatus = Failed(TRANSPORT_FAILURE_MESSAGE)
            self._store.set_status(status)
            return status
        except asyncio.CancelledError:
            self._store.set_status(IDLE)
            raise
        except Exception:
            logger.exception("registration not sent: transport raised")
            status = Failed(TRANSPORT_FAILURE_MESSAGE)
            self._store.set_status(status)
            return status

        if not response.ok:
            logger.warning("registration rejected (%d): %s", response.status, response.message)
            status = Failed(response.message or REJECTED_MESSAGE)
            self._store.set_status(status)
            return status

        status = Succeeded()
        self._store.set_status(status)
        self._store.reset()
        return status

    def dismiss(self) -> None:
        """Return a finished attempt (succeeded or failed) to ``Idle``."""
        if is_terminal(self._store.snapshot.status):
            self._store.set_status(IDLE)
