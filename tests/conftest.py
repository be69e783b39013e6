"""
Pytest configuration and fixtures.

Every test gets a fresh app on an in-memory SQLite database.
"""
from datetime import date

import pytest

from app import create_app
from extensions import db as _db
from models.accessories import Accessory
from models.cctv import CCTVCamera, Floor, Premise
from models.inventory import Asset, Assignment, Staff


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing"""
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


def _save(record):
    _db.session.add(record)
    _db.session.commit()
    return record


@pytest.fixture
def make_asset(app):
    counter = {'n': 0}

    def _make(**values):
        counter['n'] += 1
        values.setdefault('serial_number', f'SN-{counter["n"]:04d}')
        values.setdefault('model', 'Latitude 5420')
        values.setdefault('type', 'Laptop')
        values.setdefault('status', 'Available')
        return _save(Asset(**values))
    return _make


@pytest.fixture
def make_staff(app):
    counter = {'n': 0}

    def _make(**values):
        counter['n'] += 1
        values.setdefault('employee_id', f'E{counter["n"]:03d}')
        values.setdefault('name', f'Staff {counter["n"]}')
        values.setdefault('department', 'IT')
        return _save(Staff(**values))
    return _make


@pytest.fixture
def make_assignment(app):
    def _make(asset, staff, issue_date=None, return_date=None):
        return _save(Assignment(
            asset_id=asset.id,
            staff_id=staff.id,
            issue_date=issue_date or date(2024, 1, 1),
            return_date=return_date,
        ))
    return _make


@pytest.fixture
def make_accessory(app):
    def _make(**values):
        values.setdefault('type', 'RAM')
        values.setdefault('model', '8GB')
        values.setdefault('status', 'Available')
        return _save(Accessory(**values))
    return _make


@pytest.fixture
def make_camera(app):
    counter = {'n': 0}

    def _make(**values):
        counter['n'] += 1
        values.setdefault('camera_location', f'Location {counter["n"]}')
        values.setdefault('serial_number', f'CAM-{counter["n"]:04d}')
        values.setdefault('model', 'DS-2CD')
        values.setdefault('status', 'Working')
        return _save(CCTVCamera(**values))
    return _make


@pytest.fixture
def make_floor(app):
    def _make(name, sort_order=0):
        return _save(Floor(name=name, sort_order=sort_order))
    return _make


@pytest.fixture
def make_premise(app):
    def _make(name, sort_order=0):
        return _save(Premise(name=name, sort_order=sort_order))
    return _make


@pytest.fixture
def issued_iff_open(app):
    """Checks that Issued status matches having an open assignment."""
    def _check(asset_id):
        asset = _db.session.get(Asset, asset_id)
        open_count = Assignment.query.filter_by(asset_id=asset_id, return_date=None).count()
        return (asset.status == 'Issued') == (open_count > 0)
    return _check
