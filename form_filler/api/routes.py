"""API route handlers."""
import json
from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import StreamingResponse

from form_filler.api.dependencies import get_pdf_from_upload, get_processor
from form_filler.domain.exceptions import (
    ConversionError,
    DocumentLoadError,
    FormFillerError,
)
from form_filler.services.form_inspector import derive_template, describe
from form_filler.services.pdf_document import FormDocument
from form_filler.services.processor import FormProcessor

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "PDF Form Filler API",
        "description": "Upload a PDF form, list its fields, and fill them with your data",
        "main_endpoint": {
            "url": "/fill",
            "method": "POST",
            "description": "Upload PDF → (Convert XFA) → Fill fields → (Flatten) → Return filled file"
        },
        "other_endpoints": {
            "/fields": "POST - List form fields and an empty JSON template"
        }
    }


@router.post("/fields")
async def list_form_fields(file: UploadFile = File(...)):
    """List the fields of an uploaded PDF form."""
    try:
        contents, filename = await get_pdf_from_upload(file)
        with FormDocument.load(contents) as document:
            directory = document.directory()
            return {
                "filename": filename,
                "field_count": len(directory),
                "fields": describe(directory),
                "template": derive_template(directory),
            }
    except HTTPException:
        raise
    except DocumentLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing file: {str(e)}")


@router.post("/fill")
async def fill_form(
    file: UploadFile = File(...),
    data: Optional[str] = None,
    flatten: bool = False,
    convert: bool = False,
    processor: FormProcessor = Depends(get_processor),
):
    """
    Fill an uploaded PDF form with a JSON object of field values.
    """
    try:
        contents, filename = await get_pdf_from_upload(file)
        values = json.loads(data) if data else {}
        if not isinstance(values, dict):
            raise HTTPException(status_code=400, detail="data must be a JSON object")

        if convert:
            contents = processor.converter.convert(contents, filename)
        filled, report = processor.fill_bytes(contents, values, flatten)

        return StreamingResponse(
            BytesIO(filled),
            media_type="application/pdf",
            headers={
                "Content-Disposition": f"attachment; filename=filled_{filename}",
                "X-Fields-Attempted": str(report.total_attempted),
                "X-Fields-Applied": str(report.applied_count),
                "X-Fields-Skipped": str(len(report.skipped)),
            }
        )
    except HTTPException:
        raise
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid JSON in data: {e}")
    except ConversionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except DocumentLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FormFillerError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing file: {str(e)}")
