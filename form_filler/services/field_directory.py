"""Typed, named view over the interactive fields of a loaded PDF."""
from typing import Any, Dict, Iterator, List, Optional

import fitz

from form_filler.domain.exceptions import FieldNotFoundError
from form_filler.domain.models import FieldKind, FormField
from form_filler.utils.widget_helpers import (
    choice_options,
    is_checked,
    on_state,
    text_value,
    widget_kind,
)


class FieldDirectory:
    """Lookup of form fields by exact name, in the document's native order.

    The directory reads from the document but never owns it; it must not be
    used after the document is closed.
    """

    def __init__(self, document: fitz.Document):
        self.document = document
        self._fields: Dict[str, FormField] = {}
        self._pages: Dict[str, List[int]] = {}
        # Widgets are only bound while their page object is alive.
        self._loaded_pages: Dict[int, fitz.Page] = {}
        self._scan()

    @classmethod
    def from_document(cls, document: fitz.Document) -> "FieldDirectory":
        return cls(document)

    def _scan(self) -> None:
        grouped: Dict[str, List[fitz.Widget]] = {}
        for page in self.document:
            self._loaded_pages[page.number] = page
            for widget in page.widgets():
                name = widget.field_name
                if not name:
                    continue
                if name not in grouped:
                    grouped[name] = []
                    self._pages[name] = []
                grouped[name].append(widget)
                if page.number not in self._pages[name]:
                    self._pages[name].append(page.number)

        for name, widgets in grouped.items():
            self._fields[name] = self._build_field(name, widgets)

    def _build_field(self, name: str, widgets: List[fitz.Widget]) -> FormField:
        kind = widget_kind(widgets[0])
        options: List[str] = []
        if kind is FieldKind.RADIO_GROUP:
            for widget in widgets:
                state = on_state(widget)
                if state not in options:
                    options.append(state)
        elif kind is FieldKind.DROPDOWN:
            options = choice_options(widgets[0])
        return FormField(name=name, kind=kind, options=options, page=self._pages[name][0])

    def list(self) -> List[FormField]:
        """All fields in document order."""
        return list(self._fields.values())

    def lookup(self, name: str) -> FormField:
        """Resolve a field by exact, case-sensitive name."""
        form_field = self._fields.get(name)
        if form_field is None:
            raise FieldNotFoundError(name)
        return form_field

    def get(self, name: str) -> Optional[FormField]:
        return self._fields.get(name)

    def widgets(self, name: str) -> List[fitz.Widget]:
        """Live widgets of a field, re-read from their pages."""
        self.lookup(name)
        found = []
        for page_number in self._pages[name]:
            page = self._loaded_pages[page_number]
            found.extend(w for w in page.widgets() if w.field_name == name)
        return found

    def read_value(self, name: str) -> Any:
        """Current value of a field, shaped by its kind."""
        form_field = self.lookup(name)
        widgets = self.widgets(name)
        if not widgets:
            return None

        if form_field.kind in (FieldKind.TEXT_FIELD, FieldKind.DROPDOWN):
            return text_value(widgets[0].field_value)
        if form_field.kind is FieldKind.CHECK_BOX:
            return any(is_checked(self.button_state(w)) for w in widgets)
        if form_field.kind is FieldKind.RADIO_GROUP:
            for widget in widgets:
                state = self.button_state(widget)
                if not is_checked(state):
                    continue
                if isinstance(state, str):
                    return state
                return on_state(widget)
        return None

    def button_state(self, widget: fitz.Widget) -> Any:
        """Appearance state (/AS) of a button widget, or its field_value if it has none."""
        kind, value = self.document.xref_get_key(widget.xref, "AS")
        if kind == "name":
            return value.lstrip("/")
        return widget.field_value

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[FormField]:
        return iter(self._fields.values())
