"""Widget classes for the dashboard layout."""

from curation_dashboard.widgets.chrome import ContextFooter, PageBar
from curation_dashboard.widgets.details import ItemDetails
from curation_dashboard.widgets.listing import (
    ItemRow,
    SummaryCell,
    format_score,
    selection_viewport_rect,
)
from curation_dashboard.widgets.popup import InlineEditorPopup

__all__ = [
    "ContextFooter",
    "InlineEditorPopup",
    "ItemDetails",
    "ItemRow",
    "PageBar",
    "SummaryCell",
    "format_score",
    "selection_viewport_rect",
]
