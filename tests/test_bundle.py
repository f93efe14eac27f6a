"""Tests for newsletter bundle assembly."""
import asyncio
import unittest
from unittest.mock import MagicMock, patch
from datetime import datetime, timedelta
from dateutil import tz
from campus_newsletter.compose.bundle import (
    assemble_bundle,
    build_subject,
    newsletter_roster,
    split_events
)
from campus_newsletter.core.errors import ApiError, DataFetchError
from campus_newsletter.core.types import Event, Organizer
from campus_newsletter.core.weeks import resolve_window

BERLIN = tz.gettz('Europe/Berlin')


def make_event(id, start, organizer_id=1, newsletter=True, **kwargs):
    return Event(
        id=id,
        organizer_id=organizer_id,
        title_de=kwargs.pop('title_de', f'Event {id}'),
        start=start,
        publish_newsletter=newsletter,
        **kwargs
    )


class TestSplitEvents(unittest.TestCase):
    def setUp(self):
        # Primary week: Mon 2025-10-20 to Sun 2025-10-26 (Berlin)
        self.window = resolve_window((2025, 42), zone=BERLIN)
        self.organizers = {
            1: Organizer(id=1, name='Neuland', website_url='https://neuland-ingolstadt.de'),
            2: Organizer(id=2, name='Hochschulsport'),
        }

    def test_events_go_to_their_week(self):
        events = [
            make_event(1, '2025-10-21T16:00:00Z'),
            make_event(2, '2025-10-28T16:00:00Z'),
        ]
        primary, secondary = split_events(events, self.window, self.organizers)
        self.assertEqual([e.id for e in primary], [1])
        self.assertEqual([e.id for e in secondary], [2])

    def test_window_bounds_are_half_open_in_display_timezone(self):
        events = [
            # Sunday 23:30 Berlin, before the primary week
            make_event(1, '2025-10-19T21:30:00Z'),
            # Monday 00:00 Berlin, first instant of the primary week
            make_event(2, '2025-10-19T22:00:00Z'),
            # Monday 00:00 Berlin of the outlook week (CET after the DST change)
            make_event(3, '2025-10-26T23:00:00Z'),
            # Monday 00:00 Berlin after the outlook week
            make_event(4, '2025-11-02T23:00:00Z'),
        ]
        primary, secondary = split_events(events, self.window, self.organizers)
        self.assertEqual([e.id for e in primary], [2])
        self.assertEqual([e.id for e in secondary], [3])

    def test_events_without_newsletter_flag_are_dropped(self):
        events = [
            make_event(1, '2025-10-21T16:00:00Z', newsletter=False),
            make_event(2, '2025-10-22T16:00:00Z'),
        ]
        primary, _ = split_events(events, self.window, self.organizers)
        self.assertEqual([e.id for e in primary], [2])

    def test_ordered_by_start_then_id(self):
        events = [
            make_event(5, '2025-10-23T16:00:00Z'),
            make_event(4, '2025-10-21T16:00:00Z'),
            make_event(3, '2025-10-23T16:00:00Z'),
        ]
        primary, _ = split_events(events, self.window, self.organizers)
        self.assertEqual([e.id for e in primary], [4, 3, 5])

    def test_organizer_join(self):
        events = [
            make_event(1, '2025-10-21T16:00:00Z', organizer_id=1),
            make_event(2, '2025-10-21T17:00:00Z', organizer_id=2),
            make_event(3, '2025-10-21T18:00:00Z', organizer_id=99),
        ]
        primary, _ = split_events(events, self.window, self.organizers)
        self.assertEqual(primary[0].organizer_name, 'Neuland')
        self.assertEqual(primary[0].organizer_website, 'https://neuland-ingolstadt.de')
        self.assertEqual(primary[1].organizer_name, 'Hochschulsport')
        self.assertIsNone(primary[1].organizer_website)
        self.assertIsNone(primary[2].organizer_name)


class TestRosterAndSubject(unittest.TestCase):
    def test_roster_is_sorted_and_filtered(self):
        organizers = [
            Organizer(id=1, name='neuland'),
            Organizer(id=2, name='Bunte Liste', newsletter=False),
            Organizer(id=3, name='Hochschulsport'),
            Organizer(id=4, name='Akaflieg'),
        ]
        self.assertEqual(
            [o.name for o in newsletter_roster(organizers)],
            ['Akaflieg', 'Hochschulsport', 'neuland']
        )

    def test_subject(self):
        window = resolve_window((2025, 42), zone=BERLIN)
        self.assertEqual(build_subject(window), 'Campus Life Newsletter - KW 43')
        self.assertEqual(build_subject(window, 'Campus News'), 'Campus News - KW 43')


class TestAssembleBundle(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.window = resolve_window((2025, 42), zone=BERLIN)
        self.events = [
            make_event(2, '2025-10-29T16:00:00Z', organizer_id=2),
            make_event(1, '2025-10-21T16:00:00Z', organizer_id=1),
            make_event(3, '2025-10-22T16:00:00Z', newsletter=False),
        ]
        self.organizers = [
            Organizer(id=2, name='Hochschulsport'),
            Organizer(id=1, name='Neuland'),
        ]

    async def test_sync_sources(self):
        events_source = MagicMock(return_value=self.events)
        organizers_source = MagicMock(return_value=self.organizers)

        bundle = await assemble_bundle(self.window, events_source, organizers_source)

        events_source.assert_called_once_with(self.window.primary_start, self.window.secondary_start + timedelta(days=7))
        organizers_source.assert_called_once_with()
        self.assertEqual(bundle.subject, 'Campus Life Newsletter - KW 43')
        self.assertEqual(bundle.secondary_week_start - bundle.primary_week_start, timedelta(days=7))
        self.assertEqual([e.id for e in bundle.primary_week_events], [1])
        self.assertEqual([e.id for e in bundle.secondary_week_events], [2])
        self.assertEqual(bundle.primary_week_events[0].organizer_name, 'Neuland')
        self.assertEqual([o.name for o in bundle.all_organizers], ['Hochschulsport', 'Neuland'])
        self.assertEqual(bundle.primary_week_number, 43)
        self.assertEqual(bundle.secondary_week_number, 44)

    async def test_async_sources_run_concurrently(self):
        started = []

        async def events_source(start, end):
            started.append('events')
            await asyncio.sleep(0.01)
            self.assertIn('organizers', started)
            return self.events

        async def organizers_source():
            started.append('organizers')
            await asyncio.sleep(0.01)
            self.assertIn('events', started)
            return self.organizers

        bundle = await assemble_bundle(self.window, events_source, organizers_source, newsletter_name='Campus News')
        self.assertEqual(bundle.subject, 'Campus News - KW 43')
        self.assertEqual(len(bundle.primary_week_events), 1)

    @patch('campus_newsletter.compose.bundle.logger')
    async def test_api_failure_becomes_data_fetch_error(self, mock_logger):
        def failing_events(start, end):
            raise ApiError('Datenbank nicht erreichbar', status_code=500)

        with self.assertRaises(DataFetchError) as ctx:
            await assemble_bundle(self.window, failing_events, lambda: self.organizers)

        self.assertIn('Datenbank nicht erreichbar', str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, ApiError)
        mock_logger.error.assert_called_once()

    @patch('campus_newsletter.compose.bundle.logger')
    async def test_organizer_failure_yields_no_bundle(self, mock_logger):
        async def failing_organizers():
            raise ConnectionError('connection reset')

        with self.assertRaises(DataFetchError) as ctx:
            await assemble_bundle(self.window, lambda start, end: self.events, failing_organizers)
        self.assertIn('connection reset', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
