"""Revalidation controller — re-run the rule set whenever values change.

Subscribes to a ``FormStore``. Each ``FormChange`` starts one validation
pass for that change's version; when a pass finishes, its result is
handed back to the store, which applies it only if the version is still
current. Passes are never cancelled when a newer one starts: an
outdated pass simply finishes and its result is discarded.

Example::

    store = FormStore()
    controller = RevalidationController(store)
    controller.start()                       # validates the empty form
    store.set_field_value("username", "al")  # schedules another pass
    await controller.settle()                # wait for both to finish
    store.snapshot.errors["username"]        # "Username must be at least 3 characters"
"""

import asyncio
import logging
from collections.abc import Callable, Mapping

from regform.schema import REGISTRATION_RULES
from regform.store import FormChange, FormStore
from regform.validation import FieldValue, ValidationEngine, make_engine

logger = logging.getLogger("regform.revalidation")


class RevalidationController:
    """Runs asynchronous validation passes for a store.

    Must be used from inside a running event loop: passes are scheduled
    as tasks on it.
    """

    __slots__ = ("_engine", "_store", "_tasks", "_unsubscribe")

    def __init__(self, store: FormStore, *, engine: ValidationEngine | None = None) -> None:
        self._store = store
        self._engine = engine or make_engine(REGISTRATION_RULES)
        self._tasks: set[asyncio.Task[None]] = set()
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def in_flight(self) -> int:
        """Number of passes that have not finished yet."""
        return len(self._tasks)

    def start(self) -> None:
        """Subscribe to the store and validate its current values."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._store.subscribe(self._on_change)
        snapshot = self._store.snapshot
        self._schedule(snapshot.version, snapshot.data)

    def _on_change(self, event: FormChange) -> None:
        self._schedule(event.version, event.data)

    def _schedule(self, version: int, data: Mapping[str, FieldValue]) -> None:
        task = asyncio.get_running_loop().create_task(
            self._run(version, data),
            name=f"regform-validate-{version}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, version: int, data: Mapping[str, FieldValue]) -> None:
        try:
            result = await self._engine(data)
        except Exception:
            # Keep the previous outcome; a broken rule must not take the form down
            logger.exception("validation pass for version %d failed", version)
            return
        applied = self._store.apply_validation_result(version, result)
        if applied:
            logger.debug(
                "applied validation for version %d: %s",
                version,
                "valid" if result.is_valid else sorted(result.errors),
            )

    async def settle(self) -> None:
        """Wait until no validation pass is in flight.

        Passes scheduled while waiting are waited for too.
        """
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def close(self) -> None:
        """Unsubscribe and cancel passes still in flight."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for task in list(self._tasks):
            task.cancel()
