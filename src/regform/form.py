"""RegistrationForm — one form instance, fully wired.

Owns a store, a revalidation controller, and a submission controller.
A presentation layer reads ``snapshot`` and calls the entry points::

    async with RegistrationForm() as form:
        form.set_field_value("username", "alice")
        form.mark_touched("username")
        ...
        if form.snapshot.can_submit:
            status = await form.submit()

Forms share nothing: every instance owns its own state.
"""

import httpx

from regform.config import FormConfig
from regform.revalidation import RevalidationController
from regform.status import SubmissionStatus
from regform.store import FormSnapshot, FormStore
from regform.submission import SubmissionController, Transport
from regform.transport import RegistrationTransport
from regform.validation import FieldValue, ValidationEngine


class RegistrationForm:
    """The registration form core.

    Args:
        config: Endpoint, timeout, and logging settings.
        transport: Replaces the HTTP transport (e.g. in tests).
        client: httpx client for the default transport. If omitted, the
            form creates one and closes it in ``aclose()``.
        engine: Replaces the validation engine.
    """

    __slots__ = ("_client", "_config", "_owns_client", "_revalidation", "_store", "_submission")

    def __init__(
        self,
        config: FormConfig | None = None,
        *,
        transport: Transport | None = None,
        client: httpx.AsyncClient | None = None,
        engine: ValidationEngine | None = None,
    ) -> None:
        self._config = config or FormConfig()
        self._client: httpx.AsyncClient | None = None
        self._owns_client = False
        if transport is None:
            if client is None:
                client = httpx.AsyncClient(timeout=self._config.timeout)
                self._owns_client = True
            self._client = client
            transport = RegistrationTransport(
                self._config.endpoint,
                timeout=self._config.timeout,
                client=client,
            )
        self._store = FormStore()
        self._revalidation = RevalidationController(self._store, engine=engine)
        self._submission = SubmissionController(self._store, transport)

    async def __aenter__(self) -> RegistrationForm:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def store(self) -> FormStore:
        return self._store

    @property
    def snapshot(self) -> FormSnapshot:
        """The current state, read atomically."""
        return self._store.snapshot

    def start(self) -> None:
        """Begin revalidating. Call from inside a running event loop."""
        self._revalidation.start()

    # -- Entry points --

    def set_field_value(self, field: str, value: FieldValue) -> None:
        """The user changed *field*."""
        self._store.set_field_value(field, value)

    def mark_touched(self, field: str) -> None:
        """The user left *field*."""
        self._store.mark_touched(field)

    async def submit(self) -> SubmissionStatus:
        """Submit once the current values have been validated."""
        await self._revalidation.settle()
        return await self._submission.submit()

    def dismiss(self) -> None:
        """Clear a success or failure banner."""
        self._submission.dismiss()

    # -- Lifecycle --

    async def settle(self) -> None:
        """Wait for in-flight validation passes to finish."""
        await self._revalidation.settle()

    async def aclose(self) -> None:
        """Stop revalidating and release the HTTP client if the form owns it."""
        self._revalidation.close()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
