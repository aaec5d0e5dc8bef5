"""Publishing-keys form shown before the dashboard is usable."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from curation_dashboard.models import CREDENTIAL_FIELDS, TwitterCredentials

CREDENTIAL_LABELS: dict[str, str] = {
    "api_key": "API key",
    "api_secret": "API secret",
    "bearer_token": "Bearer token",
    "access_token": "Access token",
    "access_token_secret": "Access token secret",
}

# Everything except the public API key is masked while typing
SECRET_FIELDS = frozenset({"api_secret", "bearer_token", "access_token", "access_token_secret"})


def credential_input_id(name: str) -> str:
    return f"cred-{name.replace('_', '-')}"


class CredentialsModal(ModalScreen[TwitterCredentials | None]):
    """Collect the five publishing keys.

    Dismisses with the entered credentials when every field is filled, or
    None when the operator backs out.
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    CredentialsModal {
        align: center middle;
    }

    #credentials-dialog {
        width: 60%;
        min-width: 50;
        height: auto;
        background: $th-background;
        border: tall $th-accent;
        padding: 0 2;
    }

    #credentials-title {
        text-style: bold;
        color: $th-accent;
        margin-bottom: 1;
    }

    #credentials-help {
        color: $th-muted;
        margin-bottom: 1;
    }

    .credential-label {
        color: $th-text;
    }

    #credentials-dialog Input {
        width: 100%;
        background: $th-surface;
        border: none;
        margin-bottom: 1;
    }

    #credentials-buttons {
        height: auto;
        align: right middle;
    }

    #credentials-buttons Button {
        margin-left: 1;
    }
    """

    def __init__(self, initial: TwitterCredentials | None = None) -> None:
        super().__init__()
        self._initial = initial or TwitterCredentials()

    def compose(self) -> ComposeResult:
        with Vertical(id="credentials-dialog"):
            yield Label("Publishing Keys", id="credentials-title")
            yield Label(
                "The backend publishes posts with these keys. All fields are required.",
                id="credentials-help",
            )
            for name in CREDENTIAL_FIELDS:
                yield Label(CREDENTIAL_LABELS[name], classes="credential-label")
                yield Input(
                    value=getattr(self._initial, name),
                    placeholder=CREDENTIAL_LABELS[name],
                    password=name in SECRET_FIELDS,
                    id=credential_input_id(name),
                )
            with Horizontal(id="credentials-buttons"):
                yield Button("Cancel (Esc)", variant="default", id="credentials-cancel")
                yield Button("Save (Ctrl+s)", variant="primary", id="credentials-save")

    def on_mount(self) -> None:
        self.query_one(f"#{credential_input_id(CREDENTIAL_FIELDS[0])}", Input).focus()

    def collect(self) -> TwitterCredentials:
        values = {
            name: self.query_one(f"#{credential_input_id(name)}", Input).value.strip()
            for name in CREDENTIAL_FIELDS
        }
        return TwitterCredentials(**values)

    def action_save(self) -> None:
        credentials = self.collect()
        if not credentials.is_complete():
            missing = [
                CREDENTIAL_LABELS[name] for name in CREDENTIAL_FIELDS if not getattr(credentials, name)
            ]
            self.notify(
                f"Missing: {', '.join(missing)}",
                title="Publishing keys",
                severity="warning",
            )
            return
        self.dismiss(credentials)

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, "#credentials-save")
    def on_save_pressed(self) -> None:
        self.action_save()

    @on(Button.Pressed, "#credentials-cancel")
    def on_cancel_pressed(self) -> None:
        self.action_cancel()

    @on(Input.Submitted)
    def on_input_submitted(self) -> None:
        self.action_save()


__all__ = ["CREDENTIAL_LABELS", "SECRET_FIELDS", "CredentialsModal", "credential_input_id"]
