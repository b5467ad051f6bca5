"""Login and registration flow on top of the backend."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .backend import Signal

log = logging.getLogger(__name__)

Notify = Callable[[str, str], None]


def _log_notice(title: str, message: str) -> None:
    log.warning("%s: %s", title, message)


class LoginController:
    """Sends credentials to the backend and reports the outcome to the user."""

    def __init__(self, backend: Any, notify: Notify | None = None) -> None:
        self.backend = backend
        self.notify = notify if notify is not None else _log_notice
        self.login_success = Signal()
        self.closed = False
        backend.login_finished.connect(self.on_login_finished)
        backend.registration_finished.connect(self.on_registration_finished)

    def on_login_button_clicked(self, username: str, password: str) -> None:
        self.backend.login(username, password)

    def on_register_button_clicked(self, username: str, password: str) -> None:
        self.backend.register_user(username, password)

    def on_login_finished(self, success: bool) -> None:
        if success:
            self.login_success.emit()
            self.closed = True
        else:
            self.notify("Login Failed", "Invalid username or password.")

    def on_registration_finished(self, success: bool) -> None:
        if success:
            self.notify("Registration Success", "You have successfully registered.")
        else:
            self.notify("Registration Failed", "Registration failed. Try a different username.")