"""Command-line front end: log in, list songs and control playback."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Callable, TextIO

from .backend import DEFAULT_BASE_URL, BackendCommunicator, BackendError
from .library import Library
from .login import LoginController

log = logging.getLogger(__name__)

_HELP = (
    "Commands: list, select <number>, play, pause, stop, volume <0-100>, help, quit"
)

_HIDDEN_PROMPT = "Password: "


def connect_components(
    backend: BackendCommunicator, library: Library, show_main: Callable[[], None]
) -> None:
    """Wire the backend's signals to the library and the library's to the backend."""

    def on_login_finished(success: bool) -> None:
        if success:
            show_main()

    def on_song_selected(song_id: int) -> None:
        try:
            backend.request_song_url(song_id)
        except BackendError as exc:
            log.warning("Request failed: %s", exc)

    backend.login_finished.connect(on_login_finished)
    library.song_selected_for_playback.connect(on_song_selected)
    backend.songs_fetched.connect(library.on_songs_fetched)
    backend.song_fetched.connect(library.on_song_url_fetched)


def _print_songs(library: Library, out: TextIO) -> None:
    if not library.songs:
        print("No songs.", file=out)
        return
    for number, song in enumerate(library.songs, 1):
        print(f"{number:3}. {song.title} - {song.author}  {song.duration_text()}", file=out)


def _run_command(library: Library, line: str, out: TextIO) -> bool:
    """Execute one command line; returns False when the session should end."""
    command, _, argument = line.strip().partition(" ")
    argument = argument.strip()
    command = command.lower()
    if not command:
        return True
    if command in ("quit", "exit"):
        library.on_stop_button_clicked()
        return False
    if command == "list":
        _print_songs(library, out)
    elif command == "help":
        print(_HELP, file=out)
    elif command == "play":
        library.on_play_button_clicked()
    elif command == "pause":
        library.on_pause_button_clicked()
    elif command == "stop":
        library.on_stop_button_clicked()
    elif command == "select":
        try:
            number = int(argument)
        except ValueError:
            print("select needs a song number.", file=sys.stderr)
            return True
        if library.on_song_selected(number - 1) is None:
            print(f"No such song: {argument}", file=sys.stderr)
    elif command == "volume":
        try:
            value = int(argument)
        except ValueError:
            print("volume needs a number from 0 to 100.", file=sys.stderr)
            return True
        library.on_volume_changed(value)
    else:
        print(f"Unknown command: {command}. {_HELP}", file=sys.stderr)
    return True


def main(argv: list[str] | None = None) -> int:
    """Log in to the library server and control playback from standard input."""
    parser = argparse.ArgumentParser(
        prog="tunedeck", description="Browse and play songs from a music library server."
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="library server address")
    parser.add_argument("--username", help="user name; asked for when left out")
    parser.add_argument(
        "--register", action="store_true", help="register the user before logging in"
    )
    args = parser.parse_args(argv)

    out = sys.stdout
    backend = BackendCommunicator(args.base_url)
    library = Library()

    def notify(title: str, message: str) -> None:
        print(f"{title}: {message}", file=sys.stderr)

    login = LoginController(backend, notify)

    def show_main() -> None:
        print("Music Library", file=out)
        _print_songs(library, out)
        print(_HELP, file=out)

    connect_components(backend, library, show_main)

    username = args.username or input("Username: ")
    password = getpass.getpass(_HIDDEN_PROMPT)

    if args.register:
        login.on_register_button_clicked(username, password)
    login.on_login_button_clicked(username, password)
    if not login.closed:
        return 1

    for line in sys.stdin:
        if not _run_command(library, line, out):
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())