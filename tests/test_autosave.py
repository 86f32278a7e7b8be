import threading
import time

import pytest

from conftest import signup
from services.autosave import AutoSaveScheduler
from services.form_store import get_form_store


def wait_for(predicate, timeout=3.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


def test_burst_of_edits_saves_once():
    calls = []
    done = threading.Event()

    def save():
        calls.append(time.time())
        done.set()

    scheduler = AutoSaveScheduler(save, delay=0.1)
    for _ in range(5):
        scheduler.touch()
    assert scheduler.pending

    assert done.wait(2)
    time.sleep(0.2)
    assert len(calls) == 1
    assert not scheduler.pending


def test_guest_never_saves():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append(1), delay=0.01, is_guest=True)
    scheduler.touch()
    time.sleep(0.1)
    assert calls == []
    assert not scheduler.pending


def test_cancel_drops_pending_save():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append(1), delay=0.1)
    scheduler.touch()
    scheduler.cancel()
    time.sleep(0.2)
    assert calls == []


def test_failed_save_is_logged_not_raised(caplog):
    done = threading.Event()

    def save():
        done.set()
        raise RuntimeError("network down")

    scheduler = AutoSaveScheduler(save, delay=0.01)
    scheduler.touch()
    assert done.wait(2)
    assert wait_for(lambda: "Auto-save failed: network down" in caplog.text)


def test_pending_while_saving():
    saving = threading.Event()
    release = threading.Event()

    def save():
        saving.set()
        release.wait(2)

    scheduler = AutoSaveScheduler(save, delay=0.01)
    scheduler.touch()
    assert saving.wait(2)
    assert scheduler.pending
    release.set()
    assert wait_for(lambda: not scheduler.pending)


def test_edit_during_save_can_still_be_cancelled():
    calls = []
    first_saved = threading.Event()

    def save():
        calls.append(1)
        if len(calls) == 1:
            # an edit lands while the first save is running
            scheduler.touch()
            first_saved.set()

    scheduler = AutoSaveScheduler(save, delay=0.3)
    scheduler.touch()
    assert first_saved.wait(2)
    time.sleep(0.05)

    assert scheduler.pending
    scheduler.cancel()
    time.sleep(0.5)
    assert calls == [1]


def test_answer_edits_are_auto_saved(make_app):
    flask_app = make_app(AUTOSAVE_DELAY_SECONDS=0.05)
    client = flask_app.test_client()
    assert signup(client).status_code == 201

    form_id = client.post('/api/forms', json={'title': 'Auto'}).get_json()['data']['id']
    res = client.patch(f'/api/forms/{form_id}/answers', json={
        'section_id': 'tasks-performed', 'question_id': 'q1', 'value': 'drafting',
    })
    assert res.status_code == 200

    def persisted():
        with flask_app.app_context():
            return get_form_store().get(form_id)['form_data'].get('q1') == 'drafting'

    assert wait_for(persisted)


def test_flush_saves_now_without_touching_timer():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append('saved') or 'form-1', delay=0.2)
    scheduler.touch()

    assert scheduler.flush() == 'form-1'
    assert calls == ['saved']
    assert scheduler.pending
    scheduler.cancel()


def test_flush_reports_errors():
    def save():
        raise RuntimeError("network down")

    scheduler = AutoSaveScheduler(save)
    with pytest.raises(RuntimeError, match="network down"):
        scheduler.flush()


# ============================================================================
# Editing sessions registry
# ============================================================================

def open_forms(client, count):
    form_ids = []
    for n in range(count):
        form_id = client.post('/api/forms', json={'title': f'Form {n}'}).get_json()['data']['id']
        assert client.get(f'/api/forms/{form_id}').status_code == 200
        form_ids.append(form_id)
    return form_ids


def test_registry_stays_bounded(make_app):
    flask_app = make_app(EDITING_SESSIONS_MAX=5)
    client = flask_app.test_client()
    signup(client)

    form_ids = open_forms(client, 20)
    sessions = flask_app.extensions['editing_sessions']
    assert len(sessions) == 5
    # least recently used go first
    assert all(form_id in sessions for form_id in form_ids[-5:])


def test_unsaved_edits_are_never_evicted(make_app):
    flask_app = make_app(EDITING_SESSIONS_MAX=1)
    client = flask_app.test_client()
    signup(client)

    edited = open_forms(client, 1)[0]
    client.patch(f'/api/forms/{edited}/answers', json={
        'section_id': 'tasks-performed', 'question_id': 'q1', 'value': 'unsaved draft',
    })
    open_forms(client, 3)

    sessions = flask_app.extensions['editing_sessions']
    assert edited in sessions
    data = client.get(f'/api/forms/{edited}').get_json()['data']
    assert data['flat_answers']['q1'] == 'unsaved draft'


def test_saved_session_is_evicted_and_reloaded(make_app):
    flask_app = make_app(AUTOSAVE_DELAY_SECONDS=0.05, EDITING_SESSION_IDLE_SECONDS=0)
    client = flask_app.test_client()
    signup(client)

    first = open_forms(client, 1)[0]
    client.patch(f'/api/forms/{first}/answers', json={
        'section_id': 'tasks-performed', 'question_id': 'q1', 'value': 'drafting',
    })
    sessions = flask_app.extensions['editing_sessions']
    assert wait_for(lambda: not sessions.scheduler_for(first).pending)

    second = open_forms(client, 1)[0]
    assert first not in sessions
    assert second in sessions

    data = client.get(f'/api/forms/{first}').get_json()['data']
    assert data['flat_answers']['q1'] == 'drafting'


def test_touch_registers_an_evicted_session(app_ctx):
    from services.form_service import FormService, get_editing_sessions
    from services.form_session import FormSession

    session = FormSession(title='Orphan')
    FormService.save(session, 'owner-1')
    sessions = get_editing_sessions()

    session.set_answer(0, 'tasks-performed', 'q1', 'late edit')
    sessions.touch(session, 'owner-1')

    assert session.form_id in sessions
    assert sessions.scheduler_for(session.form_id).pending
