import pytest
import requests

from tunedeck.player import (
    MediaPlayer,
    MediaStatus,
    PlaybackState,
    PlayerError,
    describe_error,
    describe_state,
    describe_status,
    volume_fraction,
)

URL = "http://127.0.0.1:5000/play/1"


class FakeAudio:
    def __init__(self, error=None):
        self.calls = []
        self.error = error
        self.volume = None

    def load(self, url):
        self.calls.append(("load", url))
        if self.error is not None:
            raise self.error

    def play(self):
        self.calls.append("play")

    def pause(self):
        self.calls.append("pause")

    def resume(self):
        self.calls.append("resume")

    def stop(self):
        self.calls.append("stop")

    def set_volume(self, volume):
        self.volume = volume


def _record(signal):
    seen = []
    signal.connect(seen.append)
    return seen


def test_set_source_loads_media():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    statuses = _record(player.media_status_changed)
    player.set_source(URL)
    assert audio.calls == [("load", URL)]
    assert player.source == URL
    assert player.media_status is MediaStatus.LOADED_MEDIA
    assert statuses == [MediaStatus.LOADING_MEDIA, MediaStatus.LOADED_MEDIA]


@pytest.mark.parametrize(
    "error, expected",
    [
        (requests.ConnectionError("refused"), PlayerError.NETWORK_ERROR),
        (FileNotFoundError("missing"), PlayerError.RESOURCE_ERROR),
        (RuntimeError("bad data"), PlayerError.FORMAT_ERROR),
    ],
)
def test_set_source_failure_reports_error(error, expected):
    player = MediaPlayer(FakeAudio(error))
    errors = _record(player.error_occurred)
    player.set_source(URL)
    assert player.media_status is MediaStatus.INVALID_MEDIA
    assert errors == [expected]


def test_empty_source_clears_media():
    player = MediaPlayer(FakeAudio())
    player.set_source(URL)
    player.set_source("")
    assert player.source is None
    assert player.media_status is MediaStatus.NO_MEDIA


def test_play_without_media_does_nothing():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    states = _record(player.playback_state_changed)
    player.play()
    assert player.playback_state is PlaybackState.STOPPED
    assert states == []
    assert audio.calls == []


def test_play_after_failed_load_does_nothing():
    audio = FakeAudio(RuntimeError("bad"))
    player = MediaPlayer(audio)
    player.set_source(URL)
    player.play()
    assert player.playback_state is PlaybackState.STOPPED
    assert "play" not in audio.calls


def test_play_pause_resume_stop_cycle():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    states = _record(player.playback_state_changed)
    player.set_source(URL)
    player.play()
    player.pause()
    player.play()
    player.stop()
    assert audio.calls[1:] == ["play", "pause", "resume", "stop"]
    assert states == [
        PlaybackState.PLAYING,
        PlaybackState.PAUSED,
        PlaybackState.PLAYING,
        PlaybackState.STOPPED,
    ]
    assert player.media_status is MediaStatus.LOADED_MEDIA


def test_play_twice_emits_once():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    states = _record(player.playback_state_changed)
    player.set_source(URL)
    player.play()
    player.play()
    assert states == [PlaybackState.PLAYING]
    assert audio.calls.count("play") == 1


def test_pause_from_stopped_then_play_starts_fresh():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    player.set_source(URL)
    player.pause()
    assert player.playback_state is PlaybackState.PAUSED
    player.play()
    assert audio.calls[1:] == ["play"]


def test_new_source_stops_playback():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    player.set_source(URL)
    player.play()
    player.set_source(URL + "?again")
    assert player.playback_state is PlaybackState.STOPPED
    assert "stop" in audio.calls
    assert player.source == URL + "?again"


def test_set_volume_is_clamped():
    audio = FakeAudio()
    player = MediaPlayer(audio)
    player.set_volume(0.25)
    assert audio.volume == 0.25
    player.set_volume(1.5)
    assert player.volume == volume_fraction(100)
    player.set_volume(-1)
    assert audio.volume == volume_fraction(0)


def test_volume_fraction_bounds_and_order():
    assert volume_fraction(0) == 0.0
    assert volume_fraction(100) == 1.0
    fractions = [volume_fraction(value) for value in range(0, 101, 10)]
    assert fractions == sorted(fractions)
    assert volume_fraction(150) == volume_fraction(100)


@pytest.mark.parametrize(
    "status, text",
    [
        (MediaStatus.NO_MEDIA, "Media status changed: No Media."),
        (MediaStatus.LOADING_MEDIA, "Media status changed: Loading Media."),
        (MediaStatus.BUFFERED_MEDIA, "Media status changed: Buffered Media."),
        (MediaStatus.LOADED_MEDIA, "Media status changed: Playing Media."),
        (MediaStatus.BUFFERING_MEDIA, "Media status changed: Paused Media."),
        (MediaStatus.STALLED_MEDIA, "Media status changed: Stalled Media."),
        (MediaStatus.END_OF_MEDIA, "Media status changed: End of Media."),
        (MediaStatus.INVALID_MEDIA, "Media status changed: Invalid Media."),
    ],
)
def test_describe_status(status, text):
    assert describe_status(status) == text


@pytest.mark.parametrize(
    "error, text",
    [
        (PlayerError.NO_ERROR, "No error."),
        (PlayerError.RESOURCE_ERROR, "Resource Error occurred."),
        (PlayerError.FORMAT_ERROR, "Format Error occurred."),
        (PlayerError.NETWORK_ERROR, "Network Error occurred."),
        (PlayerError.ACCESS_DENIED_ERROR, "Access Denied Error occurred."),
    ],
)
def test_describe_error(error, text):
    assert describe_error(error) == text


@pytest.mark.parametrize(
    "state, text",
    [
        (PlaybackState.STOPPED, "Media player state: Stopped."),
        (PlaybackState.PLAYING, "Media player state: Playing."),
        (PlaybackState.PAUSED, "Media player state: Paused."),
    ],
)
def test_describe_state(state, text):
    assert describe_state(state) == text