"""Client for the Campus Life event/organizer/mail API."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from dateutil import tz as dateutil_tz
from campus_newsletter.config.settings import API_SETTINGS
from campus_newsletter.core.errors import ApiError, AuthenticationError
from campus_newsletter.core.types import Event, Organizer
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()

SESSION_COOKIE_NAME = 'session'


class CampusLifeClient:
    """Interface for reading events and organizers and sending previews.

    One client wraps one ``requests.Session`` with credentials attached; build
    it explicitly and pass it to whatever needs API access.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session_cookie: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or API_SETTINGS['base_url']).rstrip('/') + '/'
        self.timeout = timeout or API_SETTINGS['timeout']

        # Configure session with retry logic
        self.session = session or requests.Session()
        retries = Retry(
            total=API_SETTINGS['max_retries'],
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=['GET']
        )
        adapter = HTTPAdapter(max_retries=retries)
        self.session.mount('http://', adapter)
        self.session.mount('https://', adapter)

        self.session.headers.update({'Accept': 'application/json'})
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'
        if session_cookie:
            self.session.cookies.set(SESSION_COOKIE_NAME, session_cookie)

    @classmethod
    def from_settings(cls) -> 'CampusLifeClient':
        return cls(
            base_url=API_SETTINGS['base_url'],
            token=API_SETTINGS['token'],
            session_cookie=API_SETTINGS['session_cookie'],
            timeout=API_SETTINGS['timeout'],
        )

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip('/'))

    @staticmethod
    def _error_message(response: requests.Response, fallback: str) -> str:
        """Pull the server's ``message`` field out of an error body."""
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get('message'):
            return str(body['message'])
        return fallback

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        try:
            response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{fallback}: {e}")
            raise ApiError(f"{fallback}: {e}") from e

        if response.status_code == 401:
            raise AuthenticationError(
                self._error_message(response, 'Not authenticated'), status_code=401
            )
        if not response.ok:
            message = self._error_message(response, fallback)
            logger.error(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{fallback}: invalid JSON response", status_code=response.status_code) from e

    @staticmethod
    def _as_list(data: Any, what: str) -> List[Dict[str, Any]]:
        if isinstance(data, dict) and isinstance(data.get('data'), list):
            data = data['data']
        if not isinstance(data, list):
            raise ApiError(f"Invalid {what} response. Expected list, got {type(data).__name__}")
        return data

    def list_events_for_window(self, start: datetime, end: datetime) -> List[Event]:
        """Fetch events starting in ``[start, end)``.

        The server may ignore the window parameters; callers filter again.
        """
        params = {
            'start': start.astimezone(dateutil_tz.UTC).isoformat(),
            'end': end.astimezone(dateutil_tz.UTC).isoformat(),
        }
        data = self._request('GET', API_SETTINGS['events_path'], 'Failed to fetch events', params=params)
        events = [Event.from_api(item) for item in self._as_list(data, 'events')]
        logger.info(f"Fetched {len(events)} events between {params['start']} and {params['end']}")
        return events

    def list_organizers(self) -> List[Organizer]:
        data = self._request('GET', API_SETTINGS['organizers_path'], 'Failed to fetch organizers')
        organizers = [Organizer.from_api(item) for item in self._as_list(data, 'organizers')]
        logger.info(f"Fetched {len(organizers)} organizers")
        return organizers

    def send_preview_email(self, subject: str, html: str) -> None:
        """Ask the server to mail a preview of the newsletter to the current account."""
        self._request(
            'POST',
            API_SETTINGS['preview_path'],
            'Failed to send newsletter preview',
            json={'subject': subject, 'html_body': html},
        )
        logger.info(f"Preview email requested for '{subject}'")

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
