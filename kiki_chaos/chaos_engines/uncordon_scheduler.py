import threading
import time
from typing import Callable, Dict, List

from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)


class UncordonHandle:
    def __init__(self, node: str, delay_seconds: float):
        self.node = node
        self.due_at = time.monotonic() + delay_seconds
        self.timer = None

    def cancel(self):
        if self.timer is not None:
            self.timer.cancel()


class UncordonScheduler:
    '''
    Owns the delayed uncordon for every node cordoned by this process.

    Each node has at most one pending uncordon. `flush` runs all pending
    uncordons right away and is meant to be called on shutdown.
    '''

    def __init__(
        self,
        uncordon: Callable[[str], object],
        delay_seconds: float = 30.0,
        timer_factory=threading.Timer,
    ):
        self.uncordon = uncordon
        self.delay_seconds = delay_seconds
        self.timer_factory = timer_factory
        self._pending: Dict[str, UncordonHandle] = {}
        self._lock = threading.Lock()

    def schedule(self, node: str) -> UncordonHandle:
        handle = UncordonHandle(node, self.delay_seconds)
        timer = self.timer_factory(self.delay_seconds, self._fire, args=(handle,))
        timer.daemon = True
        handle.timer = timer
        with self._lock:
            previous = self._pending.pop(node, None)
            if previous is not None:
                previous.cancel()
            self._pending[node] = handle
        timer.start()
        logger.debug("Uncordon of %s scheduled in %.1fs", node, self.delay_seconds)
        return handle

    def cancel(self, node: str) -> bool:
        with self._lock:
            handle = self._pending.pop(node, None)
        if handle is None:
            return False
        handle.cancel()
        logger.info("Cancelled pending uncordon of %s", node)
        return True

    def pending(self) -> List[str]:
        with self._lock:
            return list(self._pending)

    def flush(self) -> List[str]:
        with self._lock:
            handles = list(self._pending.values())
            self._pending.clear()
        for handle in handles:
            handle.cancel()
            self._run(handle.node)
        return [h.node for h in handles]

    def _fire(self, handle: UncordonHandle):
        with self._lock:
            if self._pending.get(handle.node) is not handle:
                return
            del self._pending[handle.node]
        self._run(handle.node)

    def _run(self, node: str):
        try:
            self.uncordon(node)
        except Exception as error:
            logger.error("Failed to uncordon node %s: %s", node, error)
