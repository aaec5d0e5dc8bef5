"""Theme, help and publishing-keys handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from curation_dashboard.action_messages import build_actionable_warning, describe_request_failure
from curation_dashboard.modals import CredentialsModal, HelpScreen
from curation_dashboard.models import TwitterCredentials
from curation_dashboard.themes import next_theme_name

if TYPE_CHECKING:
    from curation_dashboard.app import CurationDashboard

logger = logging.getLogger(__name__)


def action_cycle_theme(app: "CurationDashboard") -> None:
    """Cycle through available color themes and persist the choice."""
    app._config.theme_name = next_theme_name(app._config.theme_name)
    app._apply_theme()
    app._save_config_or_warn("theme preference")
    app.notify(f"Theme: {app._config.theme_name}", title="Theme")


def action_show_help(app: "CurationDashboard") -> None:
    app.push_screen(HelpScreen())


def prompt_credentials(app: "CurationDashboard") -> None:
    """Open the publishing-keys form prefilled with the stored values."""

    def on_submit(credentials: TwitterCredentials | None) -> None:
        if credentials is None:
            if not app._config.credentials.is_complete():
                app.notify(
                    "Publishing needs keys; press K to add them",
                    title="Publishing keys",
                    severity="warning",
                )
            return
        app._config.credentials = credentials
        app._save_config_or_warn("publishing keys")
        app._track_task(store_credentials(app, credentials))

    app.push_screen(CredentialsModal(app._config.credentials), on_submit)


async def store_credentials(app: "CurationDashboard", credentials: TwitterCredentials) -> bool:
    """Hand the keys to the backend; a failure only warns."""
    try:
        await app._get_services().publish.submit_credentials(
            credentials=credentials, **app._request_kwargs()
        )
    except (httpx.HTTPError, OSError, ValueError) as exc:
        logger.warning("Submitting publishing keys failed: %s", exc, exc_info=True)
        app.notify(
            build_actionable_warning(
                "Publishing keys were saved locally but not sent to the backend",
                why=describe_request_failure(exc),
                next_step="press K to submit them again once the backend is reachable",
            ),
            title="Publishing keys",
            severity="warning",
            timeout=8,
        )
        return False
    app.notify("Publishing keys updated", title="Publishing keys")
    return True


__all__ = [
    "action_cycle_theme",
    "action_show_help",
    "prompt_credentials",
    "store_credentials",
]
