"""HTTP client for the music library backend and a minimal signal type."""

from __future__ import annotations

import logging
from http.cookiejar import Cookie
from typing import Any, Callable
from urllib.parse import urlsplit

import requests

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:5000"
REGISTERED_MESSAGE = "User registered successfully"


class Signal:
    """A list of callbacks that are called in order of connection."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register ``slot`` to be called on every emission."""
        self._slots.append(slot)

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)


class BackendError(Exception):
    """A request to the backend failed or returned something unusable."""


def _domain_matches(domain: str, host: str | None) -> bool:
    if not host:
        return False
    domain = domain.lstrip(".").lower()
    host = host.lower()
    return bool(domain) and (host == domain or host.endswith("." + domain))


class BackendCommunicator:
    """Talks to the library server: login, registration, song list and playback URLs."""

    timeout = 5.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.login_finished = Signal()
        self.songs_fetched = Signal()
        self.registration_finished = Signal()
        self.song_fetched = Signal()

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise BackendError(str(exc)) from exc
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def login(self, username: str, password: str) -> bool:
        """Log in, then fetch the song list; emits ``login_finished``."""
        try:
            self._request("POST", "/login", json={"username": username, "password": password})
        except BackendError as exc:
            log.warning("Login failed: %s", exc)
            self.login_finished.emit(False)
            return False

        for cookie in self.cookies():
            log.debug("Received cookie: %s %s", cookie.name, cookie.value)

        try:
            self.fetch_songs()
        except BackendError as exc:
            log.warning("Request failed: %s", exc)

        self.login_finished.emit(True)
        return True

    def fetch_songs(self) -> list[Any]:
        """Fetch the song list; emits ``songs_fetched`` and returns it."""
        response = self._request("GET", "/songs")
        log.debug("Response: %r", response.content)
        data = self._json(response)
        if not isinstance(data, list):
            raise BackendError("Invalid response format, expected JSON array.")
        self.songs_fetched.emit(data)
        return data

    def register_user(self, username: str, password: str) -> bool:
        """Register a new user; emits ``registration_finished`` when the reply is understood."""
        try:
            response = self._request(
                "POST", "/register", json={"username": username, "password": password}
            )
        except BackendError as exc:
            log.warning("Registration failed: %s", exc)
            self.registration_finished.emit(False)
            return False

        log.debug("Registration response: %r", response.content)
        data = self._json(response)
        if not isinstance(data, dict):
            return False
        success = data.get("message") == REGISTERED_MESSAGE
        self.registration_finished.emit(success)
        return success

    def request_song_url(self, song_id: int) -> str:
        """Resolve the playable URL of a song; emits ``song_fetched`` and returns it."""
        response = self._request("GET", f"/play/{int(song_id)}", stream=True)
        try:
            url = response.url
        finally:
            response.close()
        parts = urlsplit(url)
        if not parts.scheme or not (parts.netloc or parts.path):
            raise BackendError("Invalid URL returned.")
        log.info("Song url: %s", url)
        self.song_fetched.emit(url)
        return url

    def cookies(self) -> list[Cookie]:
        """Cookies the session holds for the backend's host."""
        host = urlsplit(self.base_url).hostname
        return [cookie for cookie in self.session.cookies if _domain_matches(cookie.domain, host)]