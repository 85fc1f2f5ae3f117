"""API dependencies for dependency injection."""
from fastapi import HTTPException, UploadFile

from form_filler.services.processor import FormProcessor


def validate_pdf_file(filename: str) -> None:
    """Validate that the uploaded file is a PDF file."""
    if not filename or not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=400,
            detail="File must be a PDF file (.pdf)"
        )


async def get_pdf_from_upload(file: UploadFile) -> tuple:
    """Read PDF bytes from an uploaded file."""
    validate_pdf_file(file.filename)
    contents = await file.read()
    return contents, file.filename


def get_processor() -> FormProcessor:
    """Create form processor instance."""
    return FormProcessor()
