import os
import sys
from types import SimpleNamespace

import pytest

# The app modules import each other flat (`from models import db`), as in api/index.py
APP_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'disclosure_checklist')
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)


# ============================================================================
# Fake Supabase client (tests only)
# ============================================================================

class FakeQuery:
    """Mimics the postgrest query builder: chain filters, then execute()."""

    def __init__(self, client, rows, op, payload=None):
        self.client = client
        self.rows = rows
        self.op = op
        self.payload = payload
        self.filters = []
        self._order = None
        self._limit = None

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.client.fail:
            raise RuntimeError("connection refused")

        if self.op == 'insert':
            self.client.next_id += 1
            row = dict(self.payload)
            row.setdefault('id', f"form-{self.client.next_id}")
            row.setdefault('public_id', None)
            row.setdefault('is_public', False)
            row.setdefault('updated_at', f"2024-01-01T00:00:{self.client.next_id:02d}")
            self.rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        matched = [row for row in self.rows if self._matches(row)]
        if self.op == 'update':
            for row in matched:
                row.update(self.payload)
        elif self.op == 'delete':
            for row in matched:
                self.rows.remove(row)
        else:
            if self._order:
                column, desc = self._order
                matched.sort(key=lambda r: r.get(column) or '', reverse=desc)
            if self._limit is not None:
                matched = matched[:self._limit]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeTable:
    def __init__(self, client, rows):
        self.client = client
        self.rows = rows

    def insert(self, payload):
        return FakeQuery(self.client, self.rows, 'insert', payload)

    def update(self, payload):
        return FakeQuery(self.client, self.rows, 'update', payload)

    def delete(self):
        return FakeQuery(self.client, self.rows, 'delete')

    def select(self, columns='*'):
        return FakeQuery(self.client, self.rows, 'select')


class FakeAuth:
    def __init__(self):
        self.calls = []
        self.users = {}

    def sign_up(self, credentials):
        self.calls.append(('sign_up', credentials['email']))
        uid = f"sb-{len(self.users) + 1}"
        self.users[credentials['email']] = (uid, credentials['password'])
        return SimpleNamespace(user=SimpleNamespace(id=uid, email=credentials['email']))

    def sign_in_with_password(self, credentials):
        self.calls.append(('sign_in', credentials['email']))
        uid, password = self.users.get(credentials['email'], (None, None))
        if uid is None or password != credentials['password']:
            raise RuntimeError("Invalid login credentials")
        return SimpleNamespace(user=SimpleNamespace(id=uid, email=credentials['email']))

    def reset_password_email(self, email, options=None):
        self.calls.append(('reset_password_email', email))


class FakeSupabase:
    def __init__(self, fail=False):
        self.fail = fail
        self.next_id = 0
        self.tables = {}
        self.auth = FakeAuth()

    def table(self, name):
        return FakeTable(self, self.tables.setdefault(name, []))


def connect_supabase(flask_app, client=None):
    """Points both the table client and the auth client factory at one fake."""
    client = client or FakeSupabase()
    flask_app.supabase = client
    flask_app.supabase_auth = lambda: client
    return client


# ============================================================================
# App fixtures
# ============================================================================

@pytest.fixture
def make_app(tmp_path):
    created = []

    def _make_app(**overrides):
        from app import create_app
        config = {
            'TESTING': True,
            'SECRET_KEY': 'test-secret',
            'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / f'test_{len(created)}.db'}",
            'SUPABASE_URL': None,
            'SUPABASE_KEY': None,
            'SUPABASE_SERVICE_ROLE_KEY': None,
            'FORM_STORE_BACKEND': 'sql',
            'AUTOSAVE_DELAY_SECONDS': 60,
            'PUBLIC_BASE_URL': 'https://checklist.example.org/app',
        }
        config.update(overrides)
        flask_app = create_app(config)
        created.append(flask_app)
        return flask_app

    yield _make_app

    from models import db
    for flask_app in created:
        flask_app.extensions['editing_sessions'].close()
        with flask_app.app_context():
            db.session.remove()
            db.engine.dispose()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def signup(client, email='researcher@example.org', password='secret123'):
    return client.post('/auth/signup', json={
        'email': email,
        'password': password,
        'confirm_password': password,
    })


@pytest.fixture
def auth_client(client):
    res = signup(client)
    assert res.status_code == 201
    return client
