"""Tests for dashboard, history and roster views."""
from datetime import date, datetime

import pytest

from design_tracker.models import DesignRequest
from design_tracker.models.design_request import STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_DONE
from design_tracker.services import views
from design_tracker.services.lifecycle import Actor

ADMIN = Actor('admin', 'Admin', 'Super Admin')
ALICE = Actor('alice', 'User', 'Alice')
DAVE = Actor('dave', 'User', 'Dave')


def _req(req_id, owner='alice', status=STATUS_PENDING, designer=None, outlet='Kopi Kenangan',
         design_type='Social Media', created_at='2024-01-15T10:00:00'):
    return DesignRequest(
        id=req_id,
        outlet_name=outlet,
        design_type=design_type,
        status=status,
        designer_name=designer,
        requestor_username=owner,
        created_at=datetime.fromisoformat(created_at),
    )


@pytest.fixture
def requests():
    # Newest first, as the store returns them
    return [
        _req('r5', owner='dave', status=STATUS_DONE, designer='carol', outlet='Fore Coffee',
             design_type='Menu', created_at='2024-02-01T00:00:00'),
        _req('r4', status=STATUS_DONE, designer='bob', outlet='Janji Jiwa - Tebet',
             design_type='Banner', created_at='2024-01-31T23:00:00'),
        _req('r3', status=STATUS_IN_PROGRESS, designer='bob', created_at='2024-01-20T08:00:00'),
        _req('r2', owner='dave', outlet='Kopi Kenangan - Senopati', created_at='2024-01-10T08:00:00'),
        _req('r1', status=STATUS_DONE, designer='carol', design_type='Flyer',
             created_at='2023-12-31T23:59:59'),
    ]


def _ids(result):
    return [r.id for r in result]


class TestDashboardView:

    def test_admin_sees_everything_in_store_order(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN)) == ['r5', 'r4', 'r3', 'r2', 'r1']

    def test_user_scoped_to_own_requests(self, requests):
        assert _ids(views.dashboard_view(requests, ALICE)) == ['r4', 'r3', 'r1']
        assert _ids(views.dashboard_view(requests, DAVE)) == ['r5', 'r2']

    def test_query_matches_outlet_case_insensitive(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN, query='KOPI')) == ['r3', 'r2', 'r1']

    def test_query_matches_design_type(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN, query='bann')) == ['r4']

    def test_status_filter(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN, status=STATUS_DONE)) == ['r5', 'r4', 'r1']
        assert len(views.dashboard_view(requests, ADMIN, status='All')) == 5

    def test_designer_filter(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN, designer='bob')) == ['r4', 'r3']

    def test_unassigned_matches_empty_designer(self, requests):
        assert _ids(views.dashboard_view(requests, ADMIN, designer='Unassigned')) == ['r2']

    def test_filters_combine(self, requests):
        result = views.dashboard_view(requests, ALICE, query='kopi', status=STATUS_DONE, designer='carol')
        assert _ids(result) == ['r1']


class TestHistoryView:

    def test_only_done_requests(self, requests):
        assert _ids(views.history_view(requests, ADMIN)) == ['r5', 'r4', 'r1']

    def test_january_range(self, requests):
        result = views.history_view(requests, ADMIN, start=date(2024, 1, 1), end=date(2024, 1, 31))
        assert _ids(result) == ['r4']

    def test_open_start(self, requests):
        assert _ids(views.history_view(requests, ADMIN, end=date(2024, 1, 31))) == ['r4', 'r1']

    def test_open_end(self, requests):
        assert _ids(views.history_view(requests, ADMIN, start=date(2024, 1, 1))) == ['r5', 'r4']

    def test_user_scoped(self, requests):
        assert _ids(views.history_view(requests, DAVE)) == ['r5']

    def test_query(self, requests):
        assert _ids(views.history_view(requests, ADMIN, query='flyer')) == ['r1']


class TestRosterAndCounts:

    def test_designer_roster_sorted_distinct(self, requests):
        assert views.designer_roster(requests) == ['bob', 'carol']

    def test_designer_roster_empty(self):
        assert views.designer_roster([]) == []

    def test_status_counts_scoped(self, requests):
        assert views.status_counts(requests, ALICE) == {
            STATUS_PENDING: 0, STATUS_IN_PROGRESS: 1, STATUS_DONE: 2,
        }
        assert views.status_counts(requests, ADMIN)[STATUS_PENDING] == 1


class TestParseDate:

    def test_empty(self):
        assert views.parse_date('') is None
        assert views.parse_date(None) is None

    def test_plain_date(self):
        assert views.parse_date('2024-01-31') == date(2024, 1, 31)

    def test_utc_datetime_becomes_naive(self):
        assert views.parse_date('2024-01-31T23:00:00Z') == datetime(2024, 1, 31, 23, 0, 0)

    def test_offset_converted_to_utc(self):
        assert views.parse_date('2024-02-01T06:00:00+07:00') == datetime(2024, 1, 31, 23, 0, 0)

    def test_invalid(self):
        with pytest.raises(ValueError):
            views.parse_date('31/01/2024')
