"""Loading, flattening and serializing PDF form documents with PyMuPDF."""
import logging

import fitz

from form_filler.domain.exceptions import DocumentLoadError
from form_filler.services.field_directory import FieldDirectory

logger = logging.getLogger(__name__)


class FormDocument:
    """An in-memory PDF document owned by one processing run."""

    def __init__(self, document: fitz.Document):
        self.document = document

    @classmethod
    def load(cls, data: bytes) -> "FormDocument":
        """Parse PDF bytes; raises DocumentLoadError for malformed input."""
        if not data:
            raise DocumentLoadError("Document is empty")
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentLoadError(f"Failed to parse PDF: {e}")
        if document.page_count == 0:
            document.close()
            raise DocumentLoadError("PDF has no pages")
        return cls(document)

    @property
    def is_form(self) -> bool:
        return bool(self.document.is_form_pdf)

    def directory(self) -> FieldDirectory:
        return FieldDirectory.from_document(self.document)

    def flatten(self) -> None:
        """Bake field appearances into page content and drop the widgets."""
        self.document.bake(annots=False, widgets=True)
        logger.info("Form has been flattened (made non-editable)")

    def serialize(self) -> bytes:
        return self.document.tobytes(garbage=3, deflate=True)

    def close(self) -> None:
        self.document.close()

    def __enter__(self) -> "FormDocument":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
