"""Shared fixtures: AcroForm PDFs built with PyMuPDF widgets."""
import re

import fitz
import pytest

from form_filler.domain.exceptions import ConversionError
from form_filler.services.pdf_document import FormDocument


def add_widget(page, field_type, name, rect, **attrs):
    widget = fitz.Widget()
    widget.field_type = field_type
    widget.field_name = name
    widget.rect = fitz.Rect(rect)
    for key, value in attrs.items():
        setattr(widget, key, value)
    return page.add_widget(widget)


def build_form_pdf() -> bytes:
    """Two-page form with one field of every kind the filler knows about."""
    doc = fitz.open()
    page = doc.new_page()
    add_widget(page, fitz.PDF_WIDGET_TYPE_TEXT, "name", (50, 50, 250, 70), field_value="")
    add_widget(page, fitz.PDF_WIDGET_TYPE_TEXT, "age", (50, 80, 250, 100), field_value="")
    add_widget(page, fitz.PDF_WIDGET_TYPE_CHECKBOX, "subscribe", (50, 110, 65, 125), field_value=False)
    add_widget(
        page, fitz.PDF_WIDGET_TYPE_COMBOBOX, "color", (50, 140, 250, 160),
        choice_values=["Red", "Green", "Blue"], field_value="Red",
    )
    add_widget(page, fitz.PDF_WIDGET_TYPE_RADIOBUTTON, "agree", (50, 170, 65, 185), field_value=False)
    add_widget(
        page, fitz.PDF_WIDGET_TYPE_LISTBOX, "sizes", (50, 200, 250, 260),
        choice_values=["S", "M", "L"], field_value="S",
    )
    second = doc.new_page()
    add_widget(second, fitz.PDF_WIDGET_TYPE_TEXT, "notes", (50, 50, 250, 70), field_value="")
    data = doc.tobytes()
    doc.close()
    return data


def rename_on_state(doc, xref, state):
    """Give a button its own 'on' appearance name instead of PyMuPDF's default."""
    for key in ("AP/N", "AP/D"):
        kind, value = doc.xref_get_key(xref, key)
        if kind != "dict":
            continue
        for name in re.findall(r"/([^\s/<>]+)\s+\d+\s+\d+\s+R", value):
            if name != "Off":
                value = value.replace(f"/{name} ", f"/{state} ")
        doc.xref_set_key(xref, key, value)


def build_radio_form_pdf(states=("Single", "Married", "Divorced")) -> bytes:
    """One radio group 'status' with a button per state, none selected."""
    doc = fitz.open()
    page = doc.new_page()
    for i, state in enumerate(states):
        rect = (50 + 30 * i, 50, 65 + 30 * i, 65)
        annot = add_widget(page, fitz.PDF_WIDGET_TYPE_RADIOBUTTON, "status", rect, field_value=False)
        rename_on_state(doc, annot.xref, state)
    data = doc.tobytes()
    doc.close()
    return data


def build_text_form_pdf(names=("t",)) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    for i, name in enumerate(names):
        add_widget(page, fitz.PDF_WIDGET_TYPE_TEXT, name, (50, 50 + 30 * i, 250, 70 + 30 * i), field_value="")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def form_pdf() -> bytes:
    return build_form_pdf()


@pytest.fixture
def form_document(form_pdf):
    document = FormDocument.load(form_pdf)
    yield document
    document.close()


@pytest.fixture
def directory(form_document):
    return form_document.directory()


@pytest.fixture
def form_file(tmp_path, form_pdf):
    path = tmp_path / "form.pdf"
    path.write_bytes(form_pdf)
    return path


class FakeConverter:
    """Stands in for the pdfRest client; returns the input unchanged."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.calls = []

    def convert(self, data: bytes, filename: str = "input.pdf") -> bytes:
        self.calls.append(filename)
        if filename in self.fail_for:
            raise ConversionError(500, "conversion failed")
        return data


@pytest.fixture
def fake_converter():
    return FakeConverter()
