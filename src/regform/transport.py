"""Registration transport — one JSON POST per submission, via httpx.

The transport reports what came back and nothing more: deciding whether
that counts as success is the submission controller's job.

- A response with a JSON body → ``TransportResponse`` (any status code).
- No response, or a body that is not JSON → ``TransportError``.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from regform.config import DEFAULT_ENDPOINT
from regform.errors import TransportError

logger = logging.getLogger("regform.transport")


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """What the registration endpoint answered.

    Attributes:
        status: HTTP status code.
        message: The body's ``message`` field, if it had a string one.
    """

    status: int
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300


class RegistrationTransport:
    """POSTs registration payloads to a fixed endpoint.

    Pass ``client`` to reuse a connection pool (or to inject an
    ``httpx.MockTransport`` in tests); the caller then owns its
    lifetime. Without one, a client is created per request.
    """

    __slots__ = ("_client", "_endpoint", "_timeout")

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._client = client

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, payload: dict[str, Any]) -> TransportResponse:
        """POST *payload* as JSON and return the parsed answer.

        Raises:
            TransportError: No response was obtained (including a malformed
                endpoint URL), or its body was not JSON.
        """
        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await self._post(client, payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("POST %s failed: %r", self._endpoint, exc)
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            logger.debug("POST %s returned a non-JSON body (%d)", self._endpoint, response.status_code)
            raise TransportError(f"invalid JSON in {response.status_code} response") from exc

        message = body.get("message") if isinstance(body, dict) else None
        return TransportResponse(
            status=response.status_code,
            message=message if isinstance(message, str) else None,
        )

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self._endpoint,
            json=payload,
            headers={"content-type": "application/json"},
            timeout=self._timeout,
        )
