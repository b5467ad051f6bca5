"""The song library view: song list, selection and playback controls."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .backend import Signal
from .player import (
    MediaPlayer,
    MediaStatus,
    PlaybackState,
    PlayerError,
    describe_error,
    describe_state,
    describe_status,
    volume_fraction,
)
from .songs import Song, parse_songs

log = logging.getLogger(__name__)

DEFAULT_VOLUME = 50


class Library:
    """Holds the fetched songs and drives a media player from user actions."""

    def __init__(self, player: MediaPlayer | None = None) -> None:
        self.player = player if player is not None else MediaPlayer()
        self.song_selected_for_playback = Signal()
        self.volume = DEFAULT_VOLUME
        self._songs: list[Song] = []
        self.player.media_status_changed.connect(self._on_media_status_changed)
        self.player.error_occurred.connect(self._on_error_occurred)
        self.player.playback_state_changed.connect(self._on_state_changed)

    @property
    def songs(self) -> tuple[Song, ...]:
        """The songs currently listed."""
        return tuple(self._songs)

    def on_songs_fetched(self, songs: Iterable[Any]) -> None:
        """Replace the listed songs with those in a fetched JSON array."""
        self._songs = parse_songs(songs)

    def on_song_selected(self, index: int) -> int | None:
        """Request playback of the song at ``index``; returns its id, or None if there is none."""
        if not 0 <= index < len(self._songs):
            return None
        song_id = self._songs[index].song_id
        log.info("Song selected: %s", song_id)
        self.song_selected_for_playback.emit(song_id)
        return song_id

    def on_song_url_fetched(self, url: str) -> None:
        """Load the playable URL of the selected song into the player."""
        if not url:
            log.warning("Failed to fetch song URL.")
            return
        log.info("Received URL for song: %s", url)
        self.player.set_source(url)
        log.info("Now playing: %s", url)

    def on_play_button_clicked(self) -> None:
        log.info("Play button clicked.")
        self.player.play()

    def on_pause_button_clicked(self) -> None:
        log.info("Pause button clicked.")
        self.player.pause()

    def on_stop_button_clicked(self) -> None:
        log.info("Stop button clicked.")
        self.player.stop()

    def on_volume_changed(self, value: int) -> None:
        """Apply a 0-100 volume slider position to the player."""
        self.volume = min(max(int(value), 0), 100)
        self.player.set_volume(volume_fraction(self.volume))
        log.info("Volume set to: %s %%", self.volume)

    @staticmethod
    def _on_media_status_changed(status: MediaStatus) -> None:
        log.info(describe_status(status))

    @staticmethod
    def _on_error_occurred(error: PlayerError) -> None:
        if error is PlayerError.NO_ERROR:
            log.info(describe_error(error))
        else:
            log.warning(describe_error(error))

    @staticmethod
    def _on_state_changed(state: PlaybackState) -> None:
        log.info(describe_state(state))