"""Convert, fill and save pipeline for single documents and directories."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from form_filler.config import config
from form_filler.domain.models import ApplicationReport, BatchResult
from form_filler.services.converter import XfaConverter
from form_filler.services.form_filler import FormFiller
from form_filler.services.form_inspector import derive_template, describe
from form_filler.services.pdf_document import FormDocument
from form_filler.services.storage import LocalStorage

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FormProcessor:
    """Runs documents through conversion, filling, flattening and saving.

    Documents are processed one at a time; each run owns its document.
    """

    def __init__(self, converter=None, storage: Optional[LocalStorage] = None,
                 filler: Optional[FormFiller] = None):
        self._converter = converter
        self.storage = storage or LocalStorage()
        self.filler = filler or FormFiller()

    @property
    def converter(self):
        """The conversion client, created from configuration on first use."""
        if self._converter is None:
            self._converter = XfaConverter()
        return self._converter

    def list_fields(self, input_path: PathLike) -> Tuple[List[Dict[str, str]], Dict[str, Any]]:
        """Describe the fields of a document and derive an empty value template."""
        with FormDocument.load(self.storage.read_all(input_path)) as document:
            directory = document.directory()
            return describe(directory), derive_template(directory)

    def fill_bytes(self, data: bytes, values: Mapping[str, Any],
                   flatten: bool = False) -> Tuple[bytes, ApplicationReport]:
        """Fill PDF bytes in memory and return the serialized result with its report."""
        with FormDocument.load(data) as document:
            if not document.is_form:
                logger.warning("Document has no interactive form fields")
            directory = document.directory()
            logger.info("Found %d fields in the form", len(directory))
            for form_field in directory:
                logger.debug("Field name: %s", form_field.name)

            report = self.filler.apply(directory, values)
            if flatten:
                document.flatten()
            return document.serialize(), report

    def fill_file(self, input_path: PathLike, output_path: PathLike,
                  values: Mapping[str, Any], flatten: bool = False) -> ApplicationReport:
        data = self.storage.read_all(input_path)
        filled, report = self.fill_bytes(data, values, flatten)
        self.storage.write_all(output_path, filled)
        logger.info("Filled PDF saved to: %s", output_path)
        return report

    def convert_file(self, input_path: PathLike, output_path: PathLike) -> None:
        data = self.storage.read_all(input_path)
        converted = self.converter.convert(data, Path(input_path).name)
        self.storage.write_all(output_path, converted)
        logger.info("AcroForm PDF downloaded and saved to: %s", output_path)

    def convert_and_fill(self, input_path: PathLike, output_path: PathLike,
                         values: Mapping[str, Any], flatten: bool = False) -> ApplicationReport:
        """Convert an XFA form to an AcroForm and fill it."""
        logger.info("Starting process for file: %s", input_path)
        data = self.storage.read_all(input_path)
        converted = self.converter.convert(data, Path(input_path).name)
        filled, report = self.fill_bytes(converted, values, flatten)
        self.storage.write_all(output_path, filled)
        logger.info("Form filled successfully! Final PDF saved to: %s", output_path)
        return report

    def batch_convert_and_fill(self, input_dir: PathLike, output_dir: PathLike,
                               values: Mapping[str, Any], flatten: bool = False,
                               convert: bool = True) -> BatchResult:
        """Process every PDF of a directory, continuing past failed documents."""
        prefix = config.processing.output_prefix

        def process(input_path: Path, output_path: Path) -> None:
            if convert:
                self.convert_and_fill(input_path, output_path, values, flatten)
            else:
                self.fill_file(input_path, output_path, values, flatten)

        return self._run_batch(input_dir, output_dir, prefix, process)

    def batch_convert(self, input_dir: PathLike, output_dir: PathLike) -> BatchResult:
        return self._run_batch(input_dir, output_dir, "", self.convert_file)

    def _run_batch(self, input_dir: PathLike, output_dir: PathLike, prefix: str, process) -> BatchResult:
        output_root = self.storage.ensure_directory(output_dir)
        files = self.storage.list_files(input_dir, config.processing.pdf_suffix)
        result = BatchResult()
        if not files:
            logger.info("No PDF files found in the input directory.")
            return result

        logger.info("Found %d PDF files. Starting batch processing...", len(files))
        for input_path in files:
            output_path = output_root / f"{prefix}{input_path.name}"
            try:
                process(input_path, output_path)
            except Exception as e:
                logger.error("Failed to process %s: %s", input_path.name, e)
                result.failures[str(input_path)] = str(e)
                continue
            logger.info("Successfully processed: %s", input_path.name)
            result.processed.append(str(output_path))

        logger.info("Batch processing completed.")
        return result
