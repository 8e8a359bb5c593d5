"""
Background data file watcher.

Design:
- Runs in its own thread so the UI stays responsive.
- Every cycle:
    1) Stat the data file and compare its (mtime_ns, size) with the last one seen.
    2) If it changed (or appeared/disappeared), reload it with read_data.
    3) Diff the set of IDs against the previous load, hand the new Data to the UI,
       and notify about IDs that were added or removed (e.g. by the CLI in another process).
    4) If loading fails, report the error and keep the previous snapshot.
- Methods:
    start(): begin the daemon thread
    stop(): signal the thread to stop
    poll_once(): run one cycle synchronously (used by the thread and by tests)
- Thread-safety: Each cycle builds a fresh Data; UI callbacks are posted back to the main thread by the UI.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import POLL_INTERVAL_SEC
from .errors import RegistryError
from .repository import Data
from .storage import read_data

logger = logging.getLogger(__name__)


class DataFileMonitor:
    def __init__(
        self,
        path: Path,
        on_any_change: Callable[[Data], None],
        notify: Callable[[List[int], List[int]], None],
        on_error: Optional[Callable[[RegistryError], None]] = None,
        interval: float = POLL_INTERVAL_SEC,
    ):
        self.path = Path(path)
        self.on_any_change = on_any_change
        self.notify = notify
        self.on_error = on_error
        self.interval = interval
        self._signature: Optional[Tuple[int, int]] = None
        self._polled = False
        self._ids: Optional[set] = None
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def _current_signature(self) -> Optional[Tuple[int, int]]:
        # size as well, since two writes can land within one mtime tick
        try:
            st = self.path.stat()
            return st.st_mtime_ns, st.st_size
        except FileNotFoundError:
            return None

    def poll_once(self) -> bool:
        """
        Purpose: Check the file once and fire callbacks if it changed.
        Outputs: True if a new snapshot was delivered.
        """
        try:
            signature = self._current_signature()
        except OSError as err:
            logger.warning("could not stat %s: %s", self.path, err)
            return False
        if self._polled and signature == self._signature:
            return False

        try:
            data = read_data(self.path)
        except RegistryError as err:
            logger.warning("could not reload %s: %s", self.path, err)
            self._signature = signature
            self._polled = True
            if self.on_error is not None:
                self.on_error(err)
            return False

        ids = {user_id for user_id, _ in data.users()}
        first = self._ids is None
        added = sorted(ids - (self._ids or set()))
        removed = sorted((self._ids or set()) - ids)
        self._signature = signature
        self._polled = True
        self._ids = ids

        self.on_any_change(data)
        # The first load is the initial paint, not a change
        if not first and (added or removed):
            self.notify(added, removed)
        return True

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.interval)
