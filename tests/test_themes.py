"""Palette/TCSS agreement and theme cycling."""

from __future__ import annotations

import re

import pytest

from curation_dashboard.modals import ConfirmModal, CredentialsModal, HelpScreen
from curation_dashboard.themes import (
    PALETTES,
    TEXTUAL_THEMES,
    THEME_NAMES,
    next_theme_name,
    resolve_theme_name,
)
from curation_dashboard.ui_constants import APP_CSS
from curation_dashboard.widgets import (
    ContextFooter,
    InlineEditorPopup,
    ItemDetails,
    ItemRow,
    PageBar,
    SummaryCell,
)

_THEME_VAR = re.compile(r"\$(th-[a-z-]+)")


def _used_variables() -> set[str]:
    sources = [
        APP_CSS,
        HelpScreen.CSS,
        ConfirmModal.CSS,
        CredentialsModal.CSS,
        ContextFooter.DEFAULT_CSS,
        PageBar.DEFAULT_CSS,
        SummaryCell.DEFAULT_CSS,
        ItemRow.DEFAULT_CSS,
        InlineEditorPopup.DEFAULT_CSS,
        ItemDetails.DEFAULT_CSS,
    ]
    return {match for css in sources for match in _THEME_VAR.findall(css)}


@pytest.mark.parametrize("name", THEME_NAMES)
def test_palette_defines_exactly_the_variables_the_css_uses(name):
    defined = set(PALETTES[name].css_variables())

    assert defined == _used_variables()


def test_state_roles_are_exposed_as_css_variables():
    variables = PALETTES["monokai"].css_variables()

    assert variables["th-busy"] == PALETTES["monokai"].busy
    assert variables["th-current-page-text"] == PALETTES["monokai"].current_page_text
    assert "th-scrollbar-track" in variables


def test_every_palette_is_registered_as_textual_theme():
    assert set(TEXTUAL_THEMES) == set(PALETTES)
    for name, theme in TEXTUAL_THEMES.items():
        assert theme.name == name
        assert theme.variables["th-error"] == PALETTES[name].error


def test_theme_cycle_wraps_and_recovers_from_unknown_names():
    assert next_theme_name("monokai") == "catppuccin-mocha"
    assert next_theme_name(THEME_NAMES[-1]) == THEME_NAMES[0]
    assert next_theme_name("no-such-theme") == THEME_NAMES[0]
    assert resolve_theme_name("no-such-theme") == "monokai"
    assert resolve_theme_name("solarized-dark") == "solarized-dark"
