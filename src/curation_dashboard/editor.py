"""Inline summary editor: edit-session state machine.

States are derived from the session: no session is CLOSED, a session with
``busy`` set is BUSY, any other session is EDITING.  Transitions go through
an explicit ``(event, state)`` dispatch table; pairs missing from the table
are ignored.

Rewrite responses are matched to the session that issued them by token.
A response that lands after its session was closed or replaced is dropped
rather than written into whatever session is open now.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from curation_dashboard.models import Anchor, EditSession, Item

logger = logging.getLogger(__name__)

RewriteCall = Callable[[str, str], Awaitable[str]]
CommitFn = Callable[[int, str], bool]


class EditorState(enum.Enum):
    CLOSED = "closed"
    EDITING = "editing"
    BUSY = "busy"


class EditorEvent(enum.Enum):
    SELECTION = "selection"
    POINTER_DOWN = "pointer_down"
    CONFIRM = "confirm"
    CANCEL = "cancel"


class RewriteKind(enum.Enum):
    SHRINK = "shrink"
    EXPAND = "expand"
    INSTRUCT = "rewrite"


def anchor_from_selection(bottom: int, left: int, *, scroll_x: int, scroll_y: int) -> Anchor:
    """Convert a selection's viewport rectangle into page coordinates."""
    return Anchor(top=bottom + scroll_y, left=left + scroll_x)


class InlineEditor:
    """Owns the single open edit session, if any."""

    def __init__(
        self,
        *,
        commit: CommitFn,
        on_change: Callable[[], None] | None = None,
        on_rewrite_error: Callable[[RewriteKind, BaseException], None] | None = None,
    ) -> None:
        self._commit = commit
        self._on_change = on_change
        self._on_rewrite_error = on_rewrite_error
        self.session: EditSession | None = None
        self._next_token = 0
        self._transitions: dict[tuple[EditorEvent, EditorState], Callable[..., bool]] = {
            (EditorEvent.SELECTION, EditorState.CLOSED): self._open,
            (EditorEvent.SELECTION, EditorState.EDITING): self._open,
            (EditorEvent.SELECTION, EditorState.BUSY): self._open,
            (EditorEvent.POINTER_DOWN, EditorState.EDITING): self._close_if_outside,
            (EditorEvent.POINTER_DOWN, EditorState.BUSY): self._close_if_outside,
            (EditorEvent.CONFIRM, EditorState.EDITING): self._confirm,
            (EditorEvent.CANCEL, EditorState.EDITING): self._close,
            (EditorEvent.CANCEL, EditorState.BUSY): self._close,
        }

    @property
    def state(self) -> EditorState:
        if self.session is None:
            return EditorState.CLOSED
        if self.session.busy:
            return EditorState.BUSY
        return EditorState.EDITING

    @property
    def is_open(self) -> bool:
        return self.session is not None

    def dispatch(self, event: EditorEvent, **payload: Any) -> bool:
        """Run the transition for *event* in the current state.

        Returns True when the event changed editor state.
        """
        handler = self._transitions.get((event, self.state))
        if handler is None:
            logger.debug("Ignoring %s while %s", event.value, self.state.value)
            return False
        return handler(**payload)

    # ── Transitions ─────────────────────────────────────────────────────

    def open(self, item: Item, selected_text: str, anchor: Anchor) -> bool:
        return self.dispatch(
            EditorEvent.SELECTION, item=item, selected_text=selected_text, anchor=anchor
        )

    def pointer_down(self, *, inside_popup: bool) -> bool:
        return self.dispatch(EditorEvent.POINTER_DOWN, inside_popup=inside_popup)

    def confirm(self) -> bool:
        return self.dispatch(EditorEvent.CONFIRM)

    def cancel(self) -> bool:
        return self.dispatch(EditorEvent.CANCEL)

    def _open(self, *, item: Item, selected_text: str, anchor: Anchor) -> bool:
        if not selected_text:
            return False
        self._next_token += 1
        # str is immutable, so the buffer can never alias the committed item
        self.session = EditSession(
            token=self._next_token,
            item_id=item.id,
            buffer=item.summary,
            anchor=anchor,
        )
        logger.debug("Opened edit session %d for item %d", self._next_token, item.id)
        self._notify()
        return True

    def _close_if_outside(self, *, inside_popup: bool) -> bool:
        if inside_popup:
            return False
        return self._close()

    def _confirm(self) -> bool:
        session = self.session
        if session is None:
            return False
        self._commit(session.item_id, session.buffer)
        return self._close()

    def _close(self) -> bool:
        if self.session is not None:
            logger.debug("Closed edit session %d", self.session.token)
        self.session = None
        self._notify()
        return True

    # ── Session edits ───────────────────────────────────────────────────

    def set_buffer(self, text: str) -> None:
        if self.session is not None and not self.session.busy:
            self.session.buffer = text

    def set_instruction(self, text: str) -> None:
        if self.session is not None:
            self.session.instruction = text

    def _is_active(self, token: int) -> bool:
        return self.session is not None and self.session.token == token

    async def rewrite(self, kind: RewriteKind, call: RewriteCall) -> bool:
        """Replace the working buffer with the result of one rewrite request.

        Refused while another request for the session is in flight.
        """
        session = self.session
        if session is None or session.busy:
            return False
        token = session.token
        session.busy = True
        self._notify()
        try:
            text = await call(session.buffer, session.instruction)
        except (httpx.HTTPError, OSError, ValueError) as exc:
            if self._is_active(token):
                logger.warning("%s request failed: %s", kind.value, exc, exc_info=True)
                if self._on_rewrite_error is not None:
                    self._on_rewrite_error(kind, exc)
            else:
                logger.debug("Ignoring %s failure for closed session %d", kind.value, token)
            return False
        finally:
            session.busy = False
            if self._is_active(token):
                self._notify()

        if not self._is_active(token):
            logger.debug("Dropping %s result for closed session %d", kind.value, token)
            return False
        session.buffer = text
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = [
    "CommitFn",
    "EditorEvent",
    "EditorState",
    "InlineEditor",
    "RewriteCall",
    "RewriteKind",
    "anchor_from_selection",
]
