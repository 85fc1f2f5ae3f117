"""Utility functions for PyMuPDF widget operations."""
from typing import Any, List, Optional

import fitz

from form_filler.domain.models import FieldKind

WIDGET_KINDS = {
    fitz.PDF_WIDGET_TYPE_TEXT: FieldKind.TEXT_FIELD,
    fitz.PDF_WIDGET_TYPE_CHECKBOX: FieldKind.CHECK_BOX,
    fitz.PDF_WIDGET_TYPE_RADIOBUTTON: FieldKind.RADIO_GROUP,
    fitz.PDF_WIDGET_TYPE_COMBOBOX: FieldKind.DROPDOWN,
}

OFF_STATE = "Off"
DEFAULT_ON_STATE = "Yes"


def widget_kind(widget: fitz.Widget) -> FieldKind:
    """Map a widget type to a field kind; list boxes, buttons and signatures are unsupported."""
    return WIDGET_KINDS.get(widget.field_type, FieldKind.UNSUPPORTED)


def on_state(widget: fitz.Widget) -> str:
    """Get the name of a button's 'on' appearance state."""
    state = widget.on_state()
    if isinstance(state, str) and state:
        return state.lstrip("/")
    return DEFAULT_ON_STATE


def choice_options(widget: fitz.Widget) -> List[str]:
    """Get the option strings of a choice widget.

    Options given as (export value, display text) pairs contribute both strings.
    """
    options: List[str] = []
    for choice in widget.choice_values or []:
        if isinstance(choice, (list, tuple)):
            options.extend(str(part) for part in choice)
        else:
            options.append(str(choice))
    return options


def export_value(widget: fitz.Widget, option: str) -> str:
    """Resolve an option string to the value stored in the field."""
    for choice in widget.choice_values or []:
        if isinstance(choice, (list, tuple)) and option in (str(part) for part in choice):
            return str(choice[0])
    return option


def is_editable_choice(widget: fitz.Widget) -> bool:
    """Check if a combo box accepts free text in addition to its options."""
    return bool(widget.field_flags & fitz.PDF_CH_FIELD_IS_EDIT)


def is_checked(value: Any) -> bool:
    """Interpret a button widget's field_value as checked or not."""
    if isinstance(value, str):
        return value.lstrip("/") not in ("", OFF_STATE)
    return bool(value)


def text_value(value: Any) -> Optional[str]:
    """Normalize a text or choice widget's field_value."""
    if value is None:
        return None
    return str(value)
