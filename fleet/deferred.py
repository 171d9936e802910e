"""Cancellable delayed callbacks tied to a screen's lifetime."""
import threading


class DeferredCall:
    """A callback that runs at most once, and never after cancel()."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False
        self._lock = threading.Lock()

    @property
    def pending(self):
        return not (self.cancelled or self.fired)

    def cancel(self):
        with self._lock:
            self.cancelled = True

    def fire(self):
        with self._lock:
            if not self.pending:
                return False
            self.fired = True
        self.callback()
        return True


def schedule_with_timer(delay, callback):
    """Run ``callback`` on a daemon timer thread after ``delay`` seconds."""
    call = DeferredCall(delay, callback)
    timer = threading.Timer(delay, call.fire)
    timer.daemon = True
    timer.start()
    return call


def schedule_manually(delay, callback):
    """Hand the call back unstarted; the caller decides when to fire it."""
    return DeferredCall(delay, callback)
