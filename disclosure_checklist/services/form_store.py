import uuid

from flask import current_app

from models import db, FormRecord, get_now, FORM_STATUS_ACTIVE, FORM_STATUS_SUBMITTED


class FormStoreError(Exception):
    """A remote or database call against the form store failed."""


class SqlFormStore:
    """Form records in the application's own database (Flask-SQLAlchemy)."""

    name = 'sql'

    def _get_model(self, form_id):
        return db.session.get(FormRecord, form_id)

    def _commit(self, action):
        try:
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            raise FormStoreError(f"Failed to {action}: {e}") from e

    def create(self, owner, snapshot):
        record = FormRecord(
            user_id=owner,
            title=snapshot.title,
            form_data=snapshot.to_form_data(),
            template_id=snapshot.template_id,
            status=FORM_STATUS_ACTIVE,
        )
        db.session.add(record)
        self._commit('create form')
        return {'id': record.id, 'public_id': record.public_id}

    def update(self, form_id, snapshot):
        record = self._get_model(form_id)
        if not record:
            raise FormStoreError(f"Form {form_id} not found")
        record.title = snapshot.title
        record.form_data = snapshot.to_form_data()
        record.updated_at = get_now()
        self._commit('update form')
        return record.to_dict()

    def get(self, form_id):
        record = self._get_model(form_id)
        return record.to_dict() if record else None

    def list(self, owner):
        records = FormRecord.query.filter_by(user_id=owner, status=FORM_STATUS_ACTIVE)\
                                  .order_by(FormRecord.updated_at.desc()).all()
        return [r.to_dict() for r in records]

    def delete(self, form_id):
        record = self._get_model(form_id)
        if not record:
            return False
        db.session.delete(record)
        self._commit('delete form')
        return True

    def publish(self, form_id, snapshot, author_name):
        record = self._get_model(form_id)
        if not record:
            raise FormStoreError(f"Form {form_id} not found")
        if not record.public_id:
            record.public_id = str(uuid.uuid4())
        record.title = snapshot.title
        record.form_data = snapshot.to_form_data()
        record.author_name = author_name
        record.is_public = True
        record.updated_at = get_now()
        self._commit('publish form')
        return {'public_id': record.public_id}

    def unpublish(self, form_id):
        record = self._get_model(form_id)
        if not record:
            raise FormStoreError(f"Form {form_id} not found")
        record.is_public = False
        self._commit('unpublish form')
        return True

    def submit(self, form_id):
        record = self._get_model(form_id)
        if not record:
            raise FormStoreError(f"Form {form_id} not found")
        record.status = FORM_STATUS_SUBMITTED
        self._commit('submit form')
        return record.to_dict()

    def fetch_public(self, public_id):
        record = FormRecord.query.filter_by(public_id=public_id, is_public=True).first()
        return record.to_dict() if record else None


class SupabaseFormStore:
    """Form records in the Supabase `forms` table."""

    name = 'supabase'

    def __init__(self, client, table='forms'):
        self.client = client
        self.table_name = table

    def _table(self):
        return self.client.table(self.table_name)

    def _execute(self, query, action):
        try:
            return query.execute()
        except Exception as e:
            raise FormStoreError(f"Failed to {action}: {e}") from e

    @staticmethod
    def _first(response):
        data = getattr(response, 'data', None) or []
        return data[0] if data else None

    def create(self, owner, snapshot):
        res = self._execute(self._table().insert({
            'user_id': owner,
            'title': snapshot.title,
            'form_data': snapshot.to_form_data(),
            'template_id': snapshot.template_id,
            'status': FORM_STATUS_ACTIVE,
        }), 'create form')
        row = self._first(res)
        if not row:
            raise FormStoreError("Failed to create form: empty response")
        return {'id': row['id'], 'public_id': row.get('public_id')}

    def update(self, form_id, snapshot):
        res = self._execute(self._table().update({
            'title': snapshot.title,
            'form_data': snapshot.to_form_data(),
            'updated_at': get_now().isoformat(),
        }).eq('id', form_id), 'update form')
        row = self._first(res)
        if not row:
            raise FormStoreError(f"Form {form_id} not found")
        return row

    def get(self, form_id):
        res = self._execute(self._table().select('*').eq('id', form_id).limit(1), 'load form')
        return self._first(res)

    def list(self, owner):
        res = self._execute(
            self._table().select('*').eq('user_id', owner).eq('status', FORM_STATUS_ACTIVE)
                         .order('updated_at', desc=True),
            'list forms')
        return list(res.data or [])

    def delete(self, form_id):
        self._execute(self._table().delete().eq('id', form_id), 'delete form')
        return True

    def publish(self, form_id, snapshot, author_name):
        current = self.get(form_id)
        if not current:
            raise FormStoreError(f"Form {form_id} not found")
        public_id = current.get('public_id') or str(uuid.uuid4())
        self._execute(self._table().update({
            'title': snapshot.title,
            'form_data': snapshot.to_form_data(),
            'author_name': author_name,
            'public_id': public_id,
            'is_public': True,
            'updated_at': get_now().isoformat(),
        }).eq('id', form_id), 'publish form')
        return {'public_id': public_id}

    def unpublish(self, form_id):
        self._execute(self._table().update({'is_public': False}).eq('id', form_id), 'unpublish form')
        return True

    def submit(self, form_id):
        res = self._execute(self._table().update({'status': FORM_STATUS_SUBMITTED}).eq('id', form_id),
                            'submit form')
        return self._first(res)

    def fetch_public(self, public_id):
        res = self._execute(
            self._table().select('*').eq('public_id', public_id).eq('is_public', True).limit(1),
            'load public form')
        return self._first(res)


def get_form_store():
    """Store bound to the current app, chosen once in create_app."""
    return current_app.extensions['form_store']


def init_form_store(app):
    backend = app.config.get('FORM_STORE_BACKEND', 'auto')
    supabase = getattr(app, 'supabase', None)
    if backend == 'supabase' or (backend == 'auto' and supabase is not None):
        if supabase is None:
            raise RuntimeError("FORM_STORE_BACKEND=supabase but Supabase is not configured")
        store = SupabaseFormStore(supabase, app.config.get('SUPABASE_FORMS_TABLE', 'forms'))
    else:
        store = SqlFormStore()
    app.extensions['form_store'] = store
    return store
