import threading
import time
from collections import OrderedDict

from flask import current_app

from services.autosave import AutoSaveScheduler, DEFAULT_AUTOSAVE_DELAY
from services.form_session import FormSession
from services.form_store import get_form_store

DEFAULT_MAX_SESSIONS = 200
DEFAULT_IDLE_TIMEOUT = 15 * 60 # seconds


class FormValidationError(ValueError):
    """Input rejected before any remote call is attempted."""


class FormService:
    @staticmethod
    def validate_title(title):
        if not title or not title.strip():
            raise FormValidationError("Form title cannot be empty.")

    @staticmethod
    def validate_author(author_name):
        if not author_name or not author_name.strip():
            raise FormValidationError("Author name is required to publish.")

    @staticmethod
    def save(session, owner):
        """
        Creates the record on first save and updates it afterwards.
        Returns the form id. Store failures propagate as FormStoreError.
        """
        FormService.validate_title(session.title)
        store = get_form_store()
        snapshot = session.to_snapshot()

        if session.form_id:
            store.update(session.form_id, snapshot)
        else:
            created = store.create(owner, snapshot)
            session.form_id = created['id']
            session.public_id = created.get('public_id')
            current_app.logger.info(f"Form created: {session.form_id} ({session.template_id})")
        return session.form_id

    @staticmethod
    def publish(session, owner, author_name):
        FormService.validate_author(author_name)
        if not session.form_id:
            FormService.save(session, owner)

        author_name = author_name.strip()
        result = get_form_store().publish(session.form_id, session.to_snapshot(), author_name)
        session.public_id = result['public_id']
        session.is_public = True
        session.author_name = author_name
        current_app.logger.info(f"Form published: {session.form_id} -> {session.public_id}")
        return session.public_id

    @staticmethod
    def unpublish(session):
        get_form_store().unpublish(session.form_id)
        # public_id is kept so a later publish reuses the same link
        session.is_public = False

    @staticmethod
    def load(form_id, owner):
        """Loads a record owned by `owner`; returns None when missing or owned by someone else."""
        record = get_form_store().get(form_id)
        if not record or str(record.get('user_id')) != str(owner):
            return None
        return FormSession.from_record(record)

    @staticmethod
    def public_url(public_id, base_url):
        return f"{base_url.rstrip('/')}/#/view/{public_id}"


class EditingSessions:
    """
    In-process registry of forms being edited, each with its debounced auto-save.
    Edits land in memory first; the scheduler persists the latest state.

    Entries are kept in least-recently-used order. Once an entry has no pending
    save it is evicted after `idle_timeout` seconds, or sooner when the registry
    holds more than `max_sessions`. The store then serves the next load.
    """

    def __init__(self, app, delay=DEFAULT_AUTOSAVE_DELAY, max_sessions=DEFAULT_MAX_SESSIONS,
                 idle_timeout=DEFAULT_IDLE_TIMEOUT):
        self.app = app
        self.delay = delay
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def __contains__(self, form_id):
        with self._lock:
            return form_id in self._sessions

    def _make_saver(self, session, owner):
        app = self.app

        def save():
            with app.app_context():
                return FormService.save(session, owner)
        return save

    def _register(self, session, owner):
        scheduler = AutoSaveScheduler(self._make_saver(session, owner), delay=self.delay)
        entry = _Entry(session, owner, scheduler)
        with self._lock:
            self._sessions[session.form_id] = entry
            self._evict(keep=session.form_id)
        return entry

    def _evict(self, keep):
        # caller holds the lock
        now = time.monotonic()
        for form_id, entry in list(self._sessions.items()):
            if form_id == keep or entry.scheduler.pending:
                continue
            idle = now - entry.last_used >= self.idle_timeout
            if idle or len(self._sessions) > self.max_sessions:
                del self._sessions[form_id]

    def get(self, form_id, owner):
        with self._lock:
            entry = self._sessions.get(form_id)
            if entry and entry.owner == owner:
                entry.last_used = time.monotonic()
                self._sessions.move_to_end(form_id)
                self._evict(keep=form_id)
                return entry.session

        session = FormService.load(form_id, owner)
        if session is None:
            return None
        self._register(session, owner)
        return session

    def touch(self, session, owner):
        """Re-arms the auto-save of `session`, registering it again if it was evicted meanwhile."""
        with self._lock:
            entry = self._sessions.get(session.form_id)
            if entry and entry.session is session:
                entry.last_used = time.monotonic()
                self._sessions.move_to_end(session.form_id)
        if not entry or entry.session is not session:
            entry = self._register(session, owner)
        entry.scheduler.touch()

    def drop(self, form_id):
        with self._lock:
            entry = self._sessions.pop(form_id, None)
        if entry:
            entry.scheduler.cancel()

    def scheduler_for(self, form_id):
        with self._lock:
            entry = self._sessions.get(form_id)
        return entry.scheduler if entry else None

    def close(self):
        """Cancels every pending auto-save and forgets all sessions."""
        with self._lock:
            entries = list(self._sessions.values())
            self._sessions.clear()
        for entry in entries:
            entry.scheduler.cancel()


class _Entry:
    def __init__(self, session, owner, scheduler):
        self.session = session
        self.owner = owner
        self.scheduler = scheduler
        self.last_used = time.monotonic()


def get_editing_sessions():
    return current_app.extensions['editing_sessions']
