"""Client for converting XFA forms to AcroForm PDFs through the pdfRest API."""
import logging
from typing import Optional

import requests

from form_filler.config import ConversionConfig, config
from form_filler.domain.exceptions import ConversionError

logger = logging.getLogger(__name__)


class XfaConverter:
    """Service for converting XFA form PDFs to AcroForm PDFs.

    Uploads the document, reads the result location from the JSON reply and
    downloads the converted bytes with the same credential.
    """

    def __init__(self, conversion_config: Optional[ConversionConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = conversion_config or config.conversion
        self.session = session or requests.Session()

    @property
    def _headers(self) -> dict:
        return {"Api-Key": self.config.api_key}

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(
                method, url, headers=self._headers, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise ConversionError(None, str(e))
        if not response.ok:
            raise ConversionError(response.status_code, response.text)
        return response

    def _upload(self, data: bytes, filename: str) -> str:
        response = self._request(
            "POST",
            self.config.upload_url,
            files={"file": (filename, data, "application/pdf")},
        )
        try:
            body = response.json()
        except ValueError:
            raise ConversionError(response.status_code, "Response is not valid JSON")
        output_url = body.get("outputUrl") if isinstance(body, dict) else None
        if not output_url:
            raise ConversionError(response.status_code, "Response is missing outputUrl")
        return output_url

    def convert(self, data: bytes, filename: str = "input.pdf") -> bytes:
        """Convert XFA form bytes to AcroForm PDF bytes."""
        logger.info("Starting conversion from XFA to AcroForm...")
        output_url = self._upload(data, filename)
        logger.info("Conversion successful! Downloading file from: %s", output_url)
        return self._request("GET", output_url).content
