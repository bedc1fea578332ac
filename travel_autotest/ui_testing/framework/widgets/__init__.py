"""
================================================================================
Widgets
================================================================================

Operations of the specialized element kinds, one module per family. Every
function takes the element first and the SessionContext second, and checks
the element's capability before touching the page.

    from travel_autotest.ui_testing.framework.widgets import counter, options

    counter.set_value(rooms, ctx, 2)
    options.select_by_visible_text(sort_box, ctx, "Lowest price first")

Author: Automation Team
License: MIT
================================================================================
"""

from . import (
    buttons,
    checked,
    collection,
    containers,
    counter,
    date_picker,
    files,
    media,
    navigation,
    options,
    rich_text,
    slider,
    text,
)

__all__ = [
    "buttons",
    "checked",
    "collection",
    "containers",
    "counter",
    "date_picker",
    "files",
    "media",
    "navigation",
    "options",
    "rich_text",
    "slider",
    "text",
]
