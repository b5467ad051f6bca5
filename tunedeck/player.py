"""Media player state machine with a pluggable audio output."""

from __future__ import annotations

import io
import logging
from enum import Enum, auto
from typing import Any
from urllib.parse import urlsplit
from urllib.request import url2pathname

import pygame
import requests

from .backend import Signal

log = logging.getLogger(__name__)


class MediaStatus(Enum):
    NO_MEDIA = auto()
    LOADING_MEDIA = auto()
    LOADED_MEDIA = auto()
    STALLED_MEDIA = auto()
    BUFFERING_MEDIA = auto()
    BUFFERED_MEDIA = auto()
    END_OF_MEDIA = auto()
    INVALID_MEDIA = auto()


class PlaybackState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()


class PlayerError(Enum):
    NO_ERROR = auto()
    RESOURCE_ERROR = auto()
    FORMAT_ERROR = auto()
    NETWORK_ERROR = auto()
    ACCESS_DENIED_ERROR = auto()


_STATUS_TEXT = {
    MediaStatus.NO_MEDIA: "Media status changed: No Media.",
    MediaStatus.LOADING_MEDIA: "Media status changed: Loading Media.",
    MediaStatus.BUFFERED_MEDIA: "Media status changed: Buffered Media.",
    MediaStatus.LOADED_MEDIA: "Media status changed: Playing Media.",
    MediaStatus.BUFFERING_MEDIA: "Media status changed: Paused Media.",
    MediaStatus.STALLED_MEDIA: "Media status changed: Stalled Media.",
    MediaStatus.END_OF_MEDIA: "Media status changed: End of Media.",
    MediaStatus.INVALID_MEDIA: "Media status changed: Invalid Media.",
}

_ERROR_TEXT = {
    PlayerError.NO_ERROR: "No error.",
    PlayerError.RESOURCE_ERROR: "Resource Error occurred.",
    PlayerError.FORMAT_ERROR: "Format Error occurred.",
    PlayerError.NETWORK_ERROR: "Network Error occurred.",
    PlayerError.ACCESS_DENIED_ERROR: "Access Denied Error occurred.",
}

_STATE_TEXT = {
    PlaybackState.STOPPED: "Media player state: Stopped.",
    PlaybackState.PLAYING: "Media player state: Playing.",
    PlaybackState.PAUSED: "Media player state: Paused.",
}


def describe_status(status: MediaStatus) -> str:
    """Log line for a media status change."""
    return _STATUS_TEXT[status]


def describe_error(error: PlayerError) -> str:
    """Log line for a player error."""
    return _ERROR_TEXT[error]


def describe_state(state: PlaybackState) -> str:
    """Log line for a playback state change."""
    return _STATE_TEXT[state]


def volume_fraction(value: int) -> float:
    """Convert a 0-100 slider position to a 0.0-1.0 volume."""
    return min(max(value, 0), 100) / 100.0


class _PygameAudio:
    """Audio output backed by the pygame mixer; remote sources are downloaded first."""

    timeout = 5.0

    def __init__(self) -> None:
        self._volume = 1.0
        self._source: Any = None

    @staticmethod
    def _mixer() -> Any:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        return pygame.mixer

    def load(self, url: str) -> None:
        parts = urlsplit(url)
        if parts.scheme in ("http", "https"):
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            source: Any = io.BytesIO(response.content)
        elif parts.scheme == "file":
            source = url2pathname(parts.path)
        else:
            source = url
        mixer = self._mixer()
        mixer.music.load(source)
        self._source = source
        mixer.music.set_volume(self._volume)

    def play(self) -> None:
        self._mixer().music.play()

    def pause(self) -> None:
        self._mixer().music.pause()

    def resume(self) -> None:
        self._mixer().music.unpause()

    def stop(self) -> None:
        self._mixer().music.stop()

    def set_volume(self, volume: float) -> None:
        self._volume = volume
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(volume)


class MediaPlayer:
    """Tracks source, media status and playback state, driving an audio output."""

    def __init__(self, audio: Any = None) -> None:
        self._audio = audio if audio is not None else _PygameAudio()
        self.media_status_changed = Signal()
        self.error_occurred = Signal()
        self.playback_state_changed = Signal()
        self._status = MediaStatus.NO_MEDIA
        self._state = PlaybackState.STOPPED
        self._source: str | None = None
        self._volume = 1.0
        self._started = False

    @property
    def media_status(self) -> MediaStatus:
        return self._status

    @property
    def playback_state(self) -> PlaybackState:
        return self._state

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def volume(self) -> float:
        return self._volume

    def _set_status(self, status: MediaStatus) -> None:
        if status is not self._status:
            self._status = status
            self.media_status_changed.emit(status)

    def _set_state(self, state: PlaybackState) -> None:
        if state is not self._state:
            self._state = state
            self.playback_state_changed.emit(state)

    def _fail(self, error: PlayerError, exc: Exception) -> None:
        log.debug("Loading %s failed: %s", self._source, exc)
        self._set_status(MediaStatus.INVALID_MEDIA)
        self.error_occurred.emit(error)

    def _has_media(self) -> bool:
        return self._source is not None and self._status not in (
            MediaStatus.NO_MEDIA,
            MediaStatus.INVALID_MEDIA,
        )

    def set_source(self, url: str | None) -> None:
        """Stop playback and load ``url``; an empty URL clears the source."""
        if self._state is not PlaybackState.STOPPED:
            self.stop()
        self._started = False
        if not url:
            self._source = None
            self._set_status(MediaStatus.NO_MEDIA)
            return
        self._source = url
        self._set_status(MediaStatus.LOADING_MEDIA)
        try:
            self._audio.load(url)
        except requests.RequestException as exc:
            self._fail(PlayerError.NETWORK_ERROR, exc)
            return
        except OSError as exc:
            self._fail(PlayerError.RESOURCE_ERROR, exc)
            return
        except (RuntimeError, ValueError) as exc:
            self._fail(PlayerError.FORMAT_ERROR, exc)
            return
        self._set_status(MediaStatus.LOADED_MEDIA)

    def play(self) -> None:
        """Start or resume playback of the loaded source."""
        if not self._has_media() or self._state is PlaybackState.PLAYING:
            return
        if self._state is PlaybackState.PAUSED and self._started:
            self._audio.resume()
        else:
            self._audio.play()
        self._started = True
        self._set_status(MediaStatus.BUFFERED_MEDIA)
        self._set_state(PlaybackState.PLAYING)

    def pause(self) -> None:
        """Pause playback."""
        if not self._has_media() or self._state is PlaybackState.PAUSED:
            return
        if self._state is PlaybackState.PLAYING:
            self._audio.pause()
        self._set_state(PlaybackState.PAUSED)

    def stop(self) -> None:
        """Stop playback and rewind."""
        if self._state is PlaybackState.STOPPED:
            return
        self._audio.stop()
        self._started = False
        self._set_state(PlaybackState.STOPPED)
        self._set_status(MediaStatus.LOADED_MEDIA)

    def set_volume(self, value: float) -> None:
        """Set the output volume, clamped to 0.0-1.0."""
        self._volume = min(max(float(value), 0.0), 1.0)
        self._audio.set_volume(self._volume)