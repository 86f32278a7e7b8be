import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_DELAY = 5.0


class AutoSaveScheduler:
    """
    Debounced auto-save for one editing session.

    Every `touch()` cancels the pending timer and arms a new one, so only the
    last edit of a burst is persisted. Guests never save.
    """

    def __init__(self, save_fn, delay=DEFAULT_AUTOSAVE_DELAY, is_guest=False):
        self.save_fn = save_fn
        self.delay = delay
        self.is_guest = is_guest
        self._timer = None
        self._lock = threading.Lock()

    @property
    def pending(self):
        return self._timer is not None and self._timer.is_alive()

    def touch(self):
        if self.is_guest:
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._run)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self):
        """Saves now, leaving any pending timer armed. Errors reach the caller."""
        if self.is_guest:
            return None
        return self.save_fn()

    def _run(self):
        self._save()
        with self._lock:
            # a touch() during the save armed a newer timer; keep it
            if self._timer is threading.current_thread():
                self._timer = None

    def _save(self):
        try:
            return self.save_fn()
        except Exception as e:
            # a failed save is retried only by the next edit or a manual save
            logger.error(f"Auto-save failed: {e}")
            return None
