"""View-by feature module: cross-view answer colors and selection state."""

from survey_app.features.view_by.context import viewby_info
from survey_app.features.view_by.selection import (
    RecordLookup,
    id_color_selected,
    toggle_answer_selected,
)

__all__ = [
    "RecordLookup",
    "id_color_selected",
    "toggle_answer_selected",
    "viewby_info",
]
