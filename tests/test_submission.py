"""Tests for regform.submission — the submission lifecycle."""

import asyncio
import logging

import pytest

from conftest import EMPTY_DATA, VALID_DATA, FakeTransport, spin
from regform.errors import TransportError
from regform.schema import REGISTRATION_RULES
from regform.status import (
    IDLE,
    REJECTED_MESSAGE,
    TRANSPORT_FAILURE_MESSAGE,
    Failed,
    Pending,
    Succeeded,
)
from regform.store import FormStore
from regform.submission import SubmissionController
from regform.transport import TransportResponse
from regform.validation import validate


def _valid_store() -> FormStore:
    store = FormStore()
    for name, value in VALID_DATA.items():
        store.set_field_value(name, value)
    store.apply_validation_result(store.version, validate(store.snapshot.data, REGISTRATION_RULES))
    return store


class TestGate:
    @pytest.mark.asyncio
    async def test_invalid_form_is_a_no_op(self, fake_transport: FakeTransport) -> None:
        store = FormStore()
        store.set_field_value("username", "al")
        store.apply_validation_result(store.version, validate(store.snapshot.data, REGISTRATION_RULES))
        before = store.snapshot

        status = await SubmissionController(store, fake_transport).submit()

        assert status == IDLE
        assert store.snapshot is before
        assert fake_transport.payloads == []

    @pytest.mark.asyncio
    async def test_never_validated_form_is_a_no_op(self, fake_transport: FakeTransport) -> None:
        await SubmissionController(FormStore(), fake_transport).submit()
        assert fake_transport.payloads == []

    @pytest.mark.asyncio
    async def test_pending_submission_blocks_another(self, fake_transport: FakeTransport) -> None:
        store = _valid_store()
        controller = SubmissionController(store, fake_transport)
        fake_transport.gate = asyncio.Event()

        first = asyncio.create_task(controller.submit())
        await spin()
        assert store.snapshot.status == Pending()
        assert await controller.submit() == Pending()

        fake_transport.gate.set()
        assert isinstance(await first, Succeeded)
        assert len(fake_transport.payloads) == 1


class TestOutcomes:
    @pytest.mark.asyncio
    async def test_success_resets_form(self, fake_transport: FakeTransport) -> None:
        store = _valid_store()
        status = await SubmissionController(store, fake_transport).submit()

        assert status == Succeeded()
        assert status.message == "Registration successful!"
        snap = store.snapshot
        assert snap.status == Succeeded()
        assert dict(snap.data) == EMPTY_DATA
        assert not any(snap.touched.values())
        assert fake_transport.payloads == [VALID_DATA]

    @pytest.mark.asyncio
    async def test_rejection_with_server_message(self) -> None:
        transport = FakeTransport(TransportResponse(status=422, message="Username taken"))
        store = _valid_store()
        status = await SubmissionController(store, transport).submit()

        assert status == Failed("Username taken")
        assert store.snapshot.status == Failed("Username taken")
        assert dict(store.snapshot.data) == VALID_DATA

    @pytest.mark.parametrize("message", [None, ""])
    @pytest.mark.asyncio
    async def test_rejection_default_message(self, message: str | None) -> None:
        transport = FakeTransport(TransportResponse(status=500, message=message))
        status = await SubmissionController(_valid_store(), transport).submit()
        assert status == Failed(REJECTED_MESSAGE)

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        transport = FakeTransport(error=TransportError("ConnectError: refused"))
        store = _valid_store()
        status = await SubmissionController(store, transport).submit()

        assert status == Failed(TRANSPORT_FAILURE_MESSAGE)
        assert status.reason == "An error occurred while sending the data"
        assert dict(store.snapshot.data) == VALID_DATA

    @pytest.mark.asyncio
    async def test_unexpected_transport_exception(self, caplog: pytest.LogCaptureFixture) -> None:
        transport = FakeTransport(error=RuntimeError("socket exploded"))
        store = _valid_store()
        with caplog.at_level(logging.ERROR, logger="regform.submission"):
            status = await SubmissionController(store, transport).submit()

        assert status == Failed(TRANSPORT_FAILURE_MESSAGE)
        assert store.snapshot.status == Failed(TRANSPORT_FAILURE_MESSAGE)
        assert store.snapshot.can_submit
        assert "registration not sent" in caplog.text

    @pytest.mark.asyncio
    async def test_cancelled_submission_returns_to_idle(self, fake_transport: FakeTransport) -> None:
        store = _valid_store()
        fake_transport.gate = asyncio.Event()
        task = asyncio.create_task(SubmissionController(store, fake_transport).submit())
        await spin()
        assert store.snapshot.status == Pending()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert store.snapshot.status == IDLE
        assert store.snapshot.can_submit

    @pytest.mark.asyncio
    async def test_transport_failure_logged_once(self, caplog: pytest.LogCaptureFixture) -> None:
        transport = FakeTransport(error=TransportError("ConnectError: refused"))
        with caplog.at_level(logging.WARNING):
            await SubmissionController(_valid_store(), transport).submit()
        assert len([r for r in caplog.records if r.levelno >= logging.WARNING]) == 1

    @pytest.mark.asyncio
    async def test_failed_attempt_can_be_retried(self) -> None:
        transport = FakeTransport(error=TransportError("timeout"))
        store = _valid_store()
        controller = SubmissionController(store, transport)
        await controller.submit()

        transport.error = None
        assert isinstance(await controller.submit(), Succeeded)
        assert len(transport.payloads) == 2


class TestDismiss:
    @pytest.mark.asyncio
    async def test_dismiss_terminal_status(self) -> None:
        transport = FakeTransport(TransportResponse(status=400))
        store = _valid_store()
        controller = SubmissionController(store, transport)
        await controller.submit()
        controller.dismiss()
        assert store.snapshot.status == IDLE

    def test_dismiss_idle_is_a_no_op(self, fake_transport: FakeTransport) -> None:
        store = FormStore()
        SubmissionController(store, fake_transport).dismiss()
        assert store.snapshot.status == IDLE
