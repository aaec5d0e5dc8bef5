"""Clipboard and browser side effects used by the dashboard actions."""

from __future__ import annotations

import logging
import platform
import subprocess
import webbrowser

logger = logging.getLogger(__name__)

# Timeout for clipboard helper processes (seconds)
SUBPROCESS_TIMEOUT = 5


def get_clipboard_command_plan(system: str) -> tuple[list[list[str]], str] | None:
    """Return clipboard command candidates and input encoding for a platform."""
    if system == "Darwin":
        return ([["pbcopy"]], "utf-8")
    if system == "Linux":
        return (
            [
                ["wl-copy"],
                ["xclip", "-selection", "clipboard"],
                ["xsel", "--clipboard", "--input"],
            ],
            "utf-8",
        )
    if system == "Windows":
        return ([["clip"]], "utf-16")
    return None


def copy_to_clipboard(text: str, *, system: str | None = None) -> bool:
    """Copy text to the system clipboard. Returns True on success.

    Candidates are tried in order; a missing or failing helper falls
    through to the next one. Failures are logged at warning level.
    """
    system = system or platform.system()
    plan = get_clipboard_command_plan(system)
    if plan is None:
        logger.warning("Clipboard copy failed: unsupported platform %s", system)
        return False
    commands, encoding = plan
    payload = text.encode(encoding)
    try:
        for index, command in enumerate(commands):
            try:
                subprocess.run(  # nosec B603
                    command,
                    input=payload,
                    check=True,
                    shell=False,
                    timeout=SUBPROCESS_TIMEOUT,
                )
                break
            except (FileNotFoundError, subprocess.CalledProcessError):
                if index == len(commands) - 1:
                    raise
        return True
    except (
        subprocess.CalledProcessError,
        FileNotFoundError,
        subprocess.TimeoutExpired,
        OSError,
    ) as e:
        logger.warning("Clipboard copy failed: %s", e)
        return False


def open_in_browser(url: str) -> bool:
    """Open *url* in the system browser. Returns True on success."""
    if not url.strip():
        return False
    try:
        return bool(webbrowser.open(url))
    except (webbrowser.Error, OSError) as e:
        logger.warning("Failed to open browser for %s: %s", url, e)
        return False


__all__ = [
    "SUBPROCESS_TIMEOUT",
    "copy_to_clipboard",
    "get_clipboard_command_plan",
    "open_in_browser",
]
