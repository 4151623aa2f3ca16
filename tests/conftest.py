"""
Test configuration and fixtures.

Each test gets a fresh app bound to an in-memory SQLite database with the
seed admin plus alice and dave (Users), bob and carol (Designers).
"""

import pytest

from design_tracker import create_app
from design_tracker.extensions import db
from design_tracker.models.design_request import STATUS_IN_PROGRESS, STATUS_DONE
from design_tracker.services import lifecycle, store
from design_tracker.services.lifecycle import Actor

PASSWORDS = {
    'alice': 'alice-pass',
    'dave': 'dave-pass',
    'bob': 'bob-pass',
    'carol': 'carol-pass',
}


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        store.init_schema()
        store.create_user('alice', PASSWORDS['alice'], 'User', 'Alice')
        store.create_user('dave', PASSWORDS['dave'], 'User', 'Dave')
        store.create_user('bob', PASSWORDS['bob'], 'Designer', 'bob')
        store.create_user('carol', PASSWORDS['carol'], 'Designer', 'carol')
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin():
    return Actor(username='admin', role='Admin', name='Super Admin')


@pytest.fixture
def alice():
    return Actor(username='alice', role='User', name='Alice')


@pytest.fixture
def dave():
    return Actor(username='dave', role='User', name='Dave')


@pytest.fixture
def bob():
    return Actor(username='bob', role='Designer', name='bob')


@pytest.fixture
def carol():
    return Actor(username='carol', role='Designer', name='carol')


@pytest.fixture
def make_request(app):
    """Factory: store a Pending request owned by ``owner``."""

    def _make(owner, outlet_name='Kopi Kenangan - Grand Indo', design_type='Social Media',
              created_at=None, **extra):
        fields = {
            'outlet_name': outlet_name,
            'design_type': design_type,
            'dimensions': '1080x1080px',
            'elements': 'Logo top right',
        }
        fields.update(extra)
        req = lifecycle.create_request(owner, fields)
        if created_at is not None:
            req.created_at = created_at
            db.session.commit()
        return req

    return _make


@pytest.fixture
def done_request(make_request, alice, bob):
    req = make_request(alice)
    lifecycle.claim(req.id, bob)
    return lifecycle.submit_result(req.id, bob, link='https://drive.example.com/final')


def assert_lifecycle_invariant(req):
    assert bool(req.designer_name) == (req.status in (STATUS_IN_PROGRESS, STATUS_DONE))
    assert bool(req.result_file_url) == (req.status == STATUS_DONE)


def login(client, username, password=None):
    if password is None:
        password = PASSWORDS.get(username, 'admin-test-pass')
    resp = client.post('/login', json={'username': username, 'password': password})
    assert resp.status_code == 200
    return resp
