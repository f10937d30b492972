"""
client.debounce - Save-on-edit with a quiet period.

One DebouncedSaver per logical table.  schedule() cancels the pending
timer and starts a new one, so a burst of edits produces a single
save once the table has been quiet for `delay` seconds.

Saves run one at a time under a lock.  Each scheduled save takes a
version number; a save that fires after a newer one has completed
is dropped, so an older snapshot never overwrites a newer one.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

import config

logger = logging.getLogger(__name__)


class DebouncedSaver:

    def __init__(
        self,
        name: str,
        snapshot: Callable[[], list],
        save: Callable[[list], bool],
        delay: float = config.SAVE_DEBOUNCE,
    ):
        self.name = name
        self.delay = delay
        self._snapshot = snapshot
        self._save = save
        self._timer: Optional[threading.Timer] = None
        self._state_lock = threading.Lock()
        self._save_lock = threading.Lock()
        self._version = 0
        self._saved_version = 0

    @property
    def pending(self) -> bool:
        with self._state_lock:
            return self._timer is not None

    @property
    def saved_version(self) -> int:
        return self._saved_version

    def schedule(self) -> int:
        """(Re)start the quiet period.  Returns the version it will save."""
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
            self._version += 1
            version = self._version
            self._timer = threading.Timer(self.delay, self._fire, args=(version,))
            self._timer.daemon = True
            self._timer.start()
        return version

    def cancel(self) -> None:
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> bool:
        """Run a pending save now.  Returns False if nothing was pending."""
        with self._state_lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            version = self._version
        return self._run(version)

    # ── Internal ───────────────────────────────────────────────────────

    def _fire(self, version: int) -> None:
        with self._state_lock:
            if version != self._version:
                return
            self._timer = None
        self._run(version)

    def _run(self, version: int) -> bool:
        with self._save_lock:
            if version <= self._saved_version:
                logger.debug(f"{self.name}: dropping stale save v{version}")
                return False
            try:
                ok = self._save(self._snapshot())
            except Exception as exc:
                logger.error(f"{self.name}: save v{version} raised: {exc}")
                return False
            if ok:
                self._saved_version = version
            else:
                logger.warning(f"{self.name}: save v{version} failed, edit kept locally")
            return ok
