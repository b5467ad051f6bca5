# tunedeck

A small console client for a music library server. You log in (optionally
registering first), tunedeck fetches the song list, and you pick a track by
number and control playback from the keyboard.

## Installing

```
pip install tunedeck
```

Requests to the server go through `requests`; the session keeps the cookie
the server sets at login for the requests that follow. Audio is played with
the `pygame` mixer. An `http`/`https` track is downloaded in full before it
starts playing; a `file:` URL or a plain path is loaded directly.

## Running

```
tunedeck [--base-url URL] [--username NAME] [--register]
```

- `--base-url` – server address, default `http://127.0.0.1:5000`
- `--username` – user name; asked for when left out
- `--register` – register the user before logging in

The password is always read without echo. If login fails the command exits
with status 1. After a successful login it prints the song list and reads
commands from standard input, one per line:

| Command          | Effect                                   |
|------------------|------------------------------------------|
| `list`           | print the song list                      |
| `select <n>`     | fetch and load song number `n` (from 1)  |
| `play`           | start or resume playback                 |
| `pause`          | pause playback                           |
| `stop`           | stop playback                            |
| `volume <0-100>` | set the volume                           |
| `help`           | list the commands                        |
| `quit`, `exit`   | stop playback and leave                  |

## Server endpoints

| Endpoint          | Method | Purpose                                     |
|-------------------|--------|---------------------------------------------|
| `/login`          | POST   | JSON `{"username", "password"}`             |
| `/register`       | POST   | JSON `{"username", "password"}`             |
| `/songs`          | GET    | JSON array of songs                         |
| `/play/<song_id>` | GET    | its final URL, after redirects, is the track |

Registration counts as successful only when the server answers with
`{"message": "User registered successfully"}`. Each song is an object with
`id`, `title`, `author` and `duration` (seconds); missing or mistyped fields
become an empty string or zero.

## Using it as a library

```python
from tunedeck.app import connect_components
from tunedeck.backend import BackendCommunicator
from tunedeck.library import Library
from tunedeck.player import MediaPlayer

backend = BackendCommunicator()
library = Library(MediaPlayer())
connect_components(backend, library, show_main=lambda: print("logged in"))

password = "password"
backend.login("listener", password)   # also fetches the song list
library.on_song_selected(0)           # ask the server for the first track
library.on_play_button_clicked()
library.on_volume_changed(75)         # 0..100
```

- `tunedeck.backend` – `BackendCommunicator` with `login`, `register_user`,
  `fetch_songs`, `request_song_url` and `cookies`. Results are reported
  through `Signal` attributes (`login_finished`, `registration_finished`,
  `songs_fetched`, `song_fetched`) that take handlers via `connect`.
  `login` and `register_user` return a bool; `fetch_songs` and
  `request_song_url` raise `BackendError` on failure.
- `tunedeck.songs` – the `Song` record, `Song.from_json`, `parse_songs`
  (skips entries that are not objects) and `Song.duration_text()`, e.g.
  `🕒 215 sec`.
- `tunedeck.player` – `MediaPlayer` with `set_source`, `play`, `pause`,
  `stop` and `set_volume` (0.0–1.0), the `MediaStatus`, `PlaybackState` and
  `PlayerError` enums, their `describe_*` log texts and `volume_fraction`.
  `MediaPlayer(audio)` accepts any object with `load`, `play`, `pause`,
  `resume`, `stop` and `set_volume`; without one it uses pygame.
- `tunedeck.library` – `Library`, which keeps the listed songs and turns
  button and selection actions into player calls.
- `tunedeck.login` – `LoginController`, which sends credentials and passes
  outcome messages to a `notify(title, message)` callback.

## What it does not do

There is no graphical window: the song list and controls are the console
commands above. Playback cannot be streamed progressively; remote tracks are
downloaded before they play. The volume of 50 that `Library` starts with is
applied to the player only once `on_volume_changed` is called.

## Tests

```
pip install "tunedeck[test]"
pytest
```