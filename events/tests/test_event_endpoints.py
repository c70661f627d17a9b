"""
Tests for the event calendar API.
"""

from datetime import date, time

import pytest
from rest_framework import status

from events.models import Event


@pytest.fixture
def event_factory(db):
    def make_event(**kwargs):
        defaults = {
            "title": "运动会",
            "description": "全校运动会",
            "start_date": date(2024, 3, 1),
            "end_date": date(2024, 3, 1),
        }
        defaults.update(kwargs)
        return Event.objects.create(**defaults)

    return make_event


@pytest.mark.django_db
class TestEventCreate:

    def test_create_with_plain_dates(self, admin_client, admin_user):
        response = admin_client.post(
            '/api/events/',
            {'title': '家长会', 'start_date': '2024-03-01', 'end_date': '2024-03-02'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_date'] == '2024-03-01'
        assert response.data['end_date'] == '2024-03-02'
        assert response.data['start_time'] is None
        assert response.data['description'] == ''
        assert Event.objects.get(pk=response.data['id']).create_user == admin_user

    def test_iso_datetime_contributes_time_of_day(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {
                'title': '讲座',
                'start_date': '2024-03-01T09:30:00Z',
                'end_date': '2024-03-01T11:00:00Z',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_date'] == '2024-03-01'
        assert response.data['start_time'] == '09:30:00'
        assert response.data['end_time'] == '11:00:00'

    def test_explicit_time_wins_over_datetime(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {
                'title': '讲座',
                'start_date': '2024-03-01T09:30:00Z',
                'start_time': '08:00',
                'end_date': '2024-03-01',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_time'] == '08:00:00'

    def test_missing_required_fields(self, admin_client):
        response = admin_client.post('/api/events/', {'title': '无日期'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_date' in response.data
        assert 'end_date' in response.data

    def test_invalid_date_is_rejected(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {'title': '坏日期', 'start_date': '2024-13-45', 'end_date': '2024-03-01'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_date' in response.data

    def test_end_before_start_is_rejected(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {'title': '倒序', 'start_date': '2024-03-05', 'end_date': '2024-03-01'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_date' in response.data
        assert Event.objects.count() == 0

    def test_same_day_end_time_before_start_time_is_rejected(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {
                'title': '倒序时间',
                'start_date': '2024-03-01',
                'end_date': '2024-03-01',
                'start_time': '10:00',
                'end_time': '09:00',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_time' in response.data

    def test_anonymous_create_is_rejected(self, api_client):
        response = api_client.post(
            '/api/events/',
            {'title': '匿名', 'start_date': '2024-03-01', 'end_date': '2024-03-01'},
            format='json',
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestEventUpdate:

    def test_partial_update_is_checked_against_stored_dates(self, admin_client, event_factory):
        event = event_factory(start_date=date(2024, 3, 10), end_date=date(2024, 3, 12))

        response = admin_client.patch(
            f'/api/events/{event.pk}/', {'end_date': '2024-03-01'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        event.refresh_from_db()
        assert event.end_date == date(2024, 3, 12)

    def test_put_only_changes_sent_fields(self, admin_client, event_factory):
        event = event_factory(description="保留")

        response = admin_client.put(f'/api/events/{event.pk}/', {'title': '改名'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        event.refresh_from_db()
        assert event.title == '改名'
        assert event.description == '保留'

    def test_delete(self, admin_client, event_factory):
        event = event_factory()

        response = admin_client.delete(f'/api/events/{event.pk}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Event.objects.filter(pk=event.pk).exists()

    def test_anonymous_delete_is_rejected(self, api_client, event_factory):
        event = event_factory()
        response = api_client.delete(f'/api/events/{event.pk}/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestEventList:

    def test_public_list_is_ordered_by_start(self, api_client, event_factory):
        event_factory(title="后", start_date=date(2024, 5, 1), end_date=date(2024, 5, 1))
        event_factory(title="前", start_date=date(2024, 4, 1), end_date=date(2024, 4, 1))
        event_factory(
            title="同日下午",
            start_date=date(2024, 4, 1),
            end_date=date(2024, 4, 1),
            start_time=time(14, 0),
        )

        response = api_client.get('/api/events/')

        assert response.status_code == status.HTTP_200_OK
        assert [item['title'] for item in response.data][-1] == "后"

    def test_range_filter_returns_overlapping_events(self, api_client, event_factory):
        event_factory(title="三月", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
        event_factory(title="跨月", start_date=date(2024, 3, 28), end_date=date(2024, 4, 2))
        event_factory(title="四月中", start_date=date(2024, 4, 10), end_date=date(2024, 4, 12))
        event_factory(title="五月", start_date=date(2024, 5, 1), end_date=date(2024, 5, 1))

        response = api_client.get('/api/events/', {'start': '2024-04-01', 'end': '2024-04-30'})

        assert sorted(item['title'] for item in response.data) == sorted(["跨月", "四月中"])

    def test_open_ended_range(self, api_client, event_factory):
        event_factory(title="旧", start_date=date(2023, 1, 1), end_date=date(2023, 1, 2))
        event_factory(title="新", start_date=date(2024, 6, 1), end_date=date(2024, 6, 1))

        response = api_client.get('/api/events/', {'start': '2024-01-01'})

        assert [item['title'] for item in response.data] == ["新"]

    def test_public_retrieve(self, api_client, event_factory):
        event = event_factory()

        response = api_client.get(f'/api/events/{event.pk}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == event.title


@pytest.mark.django_db
class TestCalendarFormPayload:
    """Dates sent as UTC-midnight ISO strings with empty time fields."""

    def test_all_day_event_is_created_without_times(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {
                'title': '校庆',
                'description': '',
                'start_date': '2024-03-01T00:00:00.000Z',
                'end_date': '2024-03-02T00:00:00.000Z',
                'start_time': '',
                'end_time': '',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_date'] == '2024-03-01'
        assert response.data['end_date'] == '2024-03-02'
        assert response.data['start_time'] is None
        assert response.data['end_time'] is None

    def test_plain_dates_with_empty_times(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {'title': 't', 'start_date': '2024-03-01', 'end_date': '2024-03-01', 'start_time': '', 'end_time': ''},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_time'] is None

    def test_sent_times_are_kept(self, admin_client):
        response = admin_client.post(
            '/api/events/',
            {
                'title': '讲座',
                'start_date': '2024-03-01T00:00:00.000Z',
                'end_date': '2024-03-01T00:00:00.000Z',
                'start_time': '09:00',
                'end_time': '',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['start_time'] == '09:00:00'
        assert response.data['end_time'] is None

    def test_put_with_empty_times_clears_stored_times(self, admin_client, event_factory):
        event = event_factory(start_time=time(9, 0), end_time=time(10, 0))

        response = admin_client.put(
            f'/api/events/{event.pk}/',
            {
                'title': event.title,
                'description': event.description,
                'start_date': '2024-03-01T00:00:00.000Z',
                'end_date': '2024-03-01T00:00:00.000Z',
                'start_time': '',
                'end_time': '',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        event.refresh_from_db()
        assert event.start_time is None
        assert event.end_time is None
        assert event.start_date == date(2024, 3, 1)
