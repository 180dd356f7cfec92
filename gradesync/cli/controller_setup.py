# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

import functools

from gradesync.controller import RosterController
from gradesync.messenger import Messenger


def confirm_action(question: str) -> bool:
    """Ask a yes/no question on the terminal; anything but yes means no."""
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def start_controller(
    server: str | None,
    timeout: tuple[float, float] | None = None,
) -> RosterController:
    """Start a messenger to this server and return a controller using it."""
    msgr = Messenger(server, timeout=timeout)
    msgr.start()
    return RosterController(msgr, confirm=confirm_action)


def with_controller(f):
    """Decorator for either server settings or an existing controller.

    Arguments:
        f (function): the function to be decorated.  It must take a
            keyword argument ``ctrl``.

    Returns:
        function: the original wrapped so that ``ctrl`` may be a tuple
        ``(server, timeout)`` instead, in which case a controller is
        made for the call and its messenger stopped afterwards.
    """

    @functools.wraps(f)
    def wrapped(*args, **kwargs):
        # if we have a controller, nothing special, just call function
        ctrl = kwargs.get("ctrl")
        if isinstance(ctrl, RosterController):
            return f(*args, **kwargs)

        # if not, we assume its appropriate args to make a controller
        settings = kwargs.pop("ctrl")
        ctrl = start_controller(*settings)
        kwargs["ctrl"] = ctrl
        try:
            return f(*args, **kwargs)
        finally:
            ctrl.msgr.stop()

    return wrapped
