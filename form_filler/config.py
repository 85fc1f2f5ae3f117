"""Application configuration."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from form_filler.domain.exceptions import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean toggle such as FLATTEN=true from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY_VALUES


@dataclass
class ConversionConfig:
    """pdfRest conversion service configuration."""
    api_key: str
    base_url: str = "https://api.pdfrest.com"
    endpoint: str = "/pdf-with-acroforms"
    timeout: Optional[float] = None

    @property
    def upload_url(self) -> str:
        return self.base_url.rstrip("/") + self.endpoint


@dataclass
class ProcessingConfig:
    """Fill and batch processing configuration."""
    flatten: bool = False
    debug: bool = False
    output_prefix: str = "filled_"
    pdf_suffix: str = ".pdf"


class Config:
    """Application configuration."""

    def __init__(self):
        self._conversion_config = None
        self._processing_config = None

    @property
    def conversion(self) -> ConversionConfig:
        """Get conversion service configuration."""
        if self._conversion_config is None:
            api_key = os.getenv("PDFREST_API_KEY")
            if not api_key:
                raise ConfigurationError("PDFREST_API_KEY environment variable is not set")
            timeout = os.getenv("PDFREST_TIMEOUT")
            try:
                timeout_value = float(timeout) if timeout else None
            except ValueError:
                raise ConfigurationError(f"PDFREST_TIMEOUT must be a number, got '{timeout}'")
            self._conversion_config = ConversionConfig(
                api_key=api_key,
                base_url=os.getenv("PDFREST_BASE_URL", ConversionConfig.base_url),
                timeout=timeout_value,
            )
        return self._conversion_config

    @property
    def processing(self) -> ProcessingConfig:
        """Get processing configuration."""
        if self._processing_config is None:
            self._processing_config = ProcessingConfig(
                flatten=env_flag("FLATTEN"),
                debug=env_flag("DEBUG"),
            )
        return self._processing_config


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


# Global configuration instance
config = Config()
