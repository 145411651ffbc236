"""Shared test doubles for regform.

- ``GatedEngine``: a validation engine whose passes finish only when the
  test releases them, so completion order can be chosen freely.
- ``FakeTransport``: records payloads and replays canned responses or
  errors.
"""

import asyncio
from collections.abc import Mapping

import pytest

from regform.schema import REGISTRATION_RULES
from regform.transport import TransportResponse
from regform.validation import FieldValue, ValidationResult, validate

VALID_DATA: dict[str, FieldValue] = {
    "username": "alice",
    "favLanguage": "rust",
    "favFood": "pizza",
    "agreement": True,
}

EMPTY_DATA: dict[str, FieldValue] = {
    "username": "",
    "favLanguage": "",
    "favFood": "",
    "agreement": False,
}


class GatedEngine:
    """Validation engine that blocks each pass on its own ``asyncio.Event``."""

    def __init__(self) -> None:
        self.gates: list[asyncio.Event] = []
        self.seen: list[dict[str, FieldValue]] = []

    async def __call__(self, data: Mapping[str, FieldValue]) -> ValidationResult:
        gate = asyncio.Event()
        self.gates.append(gate)
        self.seen.append(dict(data))
        await gate.wait()
        return validate(data, REGISTRATION_RULES)

    def release(self, index: int) -> None:
        self.gates[index].set()

    def release_all(self) -> None:
        for gate in self.gates:
            gate.set()


class FakeTransport:
    """Transport double: returns ``response`` or raises ``error``."""

    def __init__(
        self,
        response: TransportResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response or TransportResponse(status=201, message="Welcome")
        self.error = error
        self.payloads: list[dict[str, object]] = []
        self.gate: asyncio.Event | None = None

    async def send(self, payload: dict[str, object]) -> TransportResponse:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


async def spin(turns: int = 5) -> None:
    """Let scheduled tasks run for a few event-loop turns."""
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def gated_engine() -> GatedEngine:
    return GatedEngine()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()
