"""Domain-specific exceptions."""
from typing import Optional


class FormFillerError(Exception):
    """Base exception for form filler operations."""
    pass


class DocumentNotFoundError(FormFillerError):
    """Raised when an input document does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Input file not found: {path}")


class DocumentLoadError(FormFillerError):
    """Raised when document bytes cannot be parsed as a PDF."""
    pass


class FieldNotFoundError(FormFillerError):
    """Raised when a field name does not exist in the form."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No form field named '{name}'")


class InvalidOptionError(FormFillerError):
    """Raised when a selection field is given an option it does not offer."""

    def __init__(self, name: str, option: str):
        self.name = name
        self.option = option
        super().__init__(f"'{option}' is not an option of field '{name}'")


class ConversionError(FormFillerError):
    """Raised when the remote XFA to AcroForm conversion fails."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        if status_code is None:
            super().__init__(f"Error during conversion: {message}")
        else:
            super().__init__(f"API Error ({status_code}): {message}")


class DataFileError(FormFillerError):
    """Raised when a field value file cannot be read."""
    pass


class StorageError(FormFillerError):
    """Raised when a file or directory cannot be written."""
    pass


class ConfigurationError(FormFillerError):
    """Raised when configuration is invalid."""
    pass
