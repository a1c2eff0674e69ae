#------------------------------------------------------------
#                         trigger.py
#        Fires the portfolio pipeline exactly once, on
#         boot timer expiry or on an earlier skip.

import threading
from typing import Callable, Optional

# Lock-guarded latch that lets exactly one caller through.
class OneShotLatch:

    def __init__(self):
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        with self._lock:
            return self._fired

    # Returns True only for the first caller.
    def fire(self) -> bool:
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True

# This class does run the action once after the boot delay, or sooner when skipped.
# The boot timer and the skip path share one latch, so the action runs at most once.
class BootTrigger:

    def __init__(self, action: Callable[[], None], boot_delay: float, skip_delay: float):
        self.action = action
        self.boot_delay = boot_delay
        self.skip_delay = skip_delay
        self._run_latch = OneShotLatch()
        self._skip_latch = OneShotLatch()
        self._done = threading.Event()
        self._timers_lock = threading.Lock()
        self._boot_timer: Optional[threading.Timer] = None
        self._skip_timer: Optional[threading.Timer] = None

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def _run(self) -> None:
        if not self._run_latch.fire():
            return
        try:
            self.action()
        finally:
            self._done.set()

    def _start_timer(self, delay: float) -> threading.Timer:
        timer = threading.Timer(delay, self._run)
        timer.daemon = True
        timer.start()
        return timer

    def start(self) -> None:
        with self._timers_lock:
            if self._boot_timer is None:
                self._boot_timer = self._start_timer(self.boot_delay)

    # This function does accept the user's skip signal.
    # Only the first skip counts; later ones are ignored.
    def skip(self) -> bool:
        if not self._skip_latch.fire():
            return False
        with self._timers_lock:
            if self._boot_timer is not None:
                self._boot_timer.cancel()
            self._skip_timer = self._start_timer(self.skip_delay)
        return True

    def cancel(self) -> None:
        with self._timers_lock:
            for timer in (self._boot_timer, self._skip_timer):
                if timer is not None:
                    timer.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)
