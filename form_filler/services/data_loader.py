"""Loading field value maps from JSON and Excel files."""
import json
from pathlib import Path
from typing import Any, Dict, Union

from openpyxl import load_workbook

from form_filler.domain.exceptions import DataFileError

EXCEL_SUFFIXES = (".xlsx", ".xlsm")

# IRS Form 2848 (Power of Attorney) example values, keyed by AcroForm field name.
SAMPLE_FORM_2848 = {
    "topmostSubform[0].Page1[0].TaxpayerName[0]": "John Q. Taxpayer",
    "topmostSubform[0].Page1[0].TaxpayerAddress[0]": "123 Main Street, Anytown, CA 90210",
    "topmostSubform[0].Page1[0].TaxpayerIDSSN[0]": "123-45-6789",
    "topmostSubform[0].Page1[0].TaxpayerIDEIN[0]": "",
    "topmostSubform[0].Page1[0].TaxpayerTelephone[0]": "555-123-4567",
    "topmostSubform[0].Page1[0].TaxpayerPlanNumber[0]": "",
    "topmostSubform[0].Page1[0].RepresentativesName1[0]": "Jane Smith, CPA",
    "topmostSubform[0].Page1[0].RepresentativesAddress1[0]": "456 Tax Lane, Suite 300, Taxville, CA 92101",
    "topmostSubform[0].Page1[0].SentCopies1[0]": True,
    "topmostSubform[0].Page1[0].CAFNumber1[0]": "0123456789R",
    "topmostSubform[0].Page1[0].PTIN1[0]": "P12345678",
    "topmostSubform[0].Page1[0].TelephoneNo1[0]": "555-987-6543",
    "topmostSubform[0].Page1[0].FaxNo1[0]": "555-987-6544",
    "topmostSubform[0].Page1[0].NewAddress1[0]": False,
    "topmostSubform[0].Page1[0].NewTelephoneNo1[0]": False,
    "topmostSubform[0].Page1[0].NewFaxNo1[0]": False,
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow1[0].Description1[0]": "Income Tax",
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow1[0].TaxForm1[0]": "1040",
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow1[0].Years1[0]": "2022, 2023, 2024",
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow2[0].Description2[0]": "Civil Penalties",
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow2[0].TaxForm2[0]": "All",
    "topmostSubform[0].Page1[0].Table_Line3[0].BodyRow2[0].Years2[0]": "2022, 2023, 2024",
    "topmostSubform[0].Page1[0].AccessRecords[0]": True,
    "topmostSubform[0].Page1[0].AuthorizeDisclosure[0]": True,
    "topmostSubform[0].Page1[0].SubtituteOrAdd[0]": True,
    "topmostSubform[0].Page1[0].SignReturn[0]": True,
    "topmostSubform[0].Page2[0].PrintName[0]": "Jane Smith",
    "topmostSubform[0].Page2[0].PrintNameTaxpayer[0]": "John Q. Taxpayer",
    "topmostSubform[0].Page2[0].Table_PartII[0].BodyRow1[0].Designation1[0]": "CPA",
    "topmostSubform[0].Page2[0].Table_PartII[0].BodyRow1[0].Jurisdiction1[0]": "CA",
    "topmostSubform[0].Page2[0].Table_PartII[0].BodyRow1[0].Bar1[0]": "12345",
    "topmostSubform[0].Page2[0].Table_PartII[0].BodyRow1[0].Date1[0]": "03/08/2025",
}


def load_value_map(path: Union[str, Path], row: int = 2) -> Dict[str, Any]:
    """Load a field name to value mapping from a .json or .xlsx file.

    Excel files hold field names in the first row and values in ``row``.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DataFileError(f"Data file not found: {path}")

    if file_path.suffix.lower() in EXCEL_SUFFIXES:
        return _load_excel(file_path, row)
    return _load_json(file_path)


def _load_json(file_path: Path) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataFileError(f"Cannot read JSON data file '{file_path}': {e}")
    if not isinstance(data, dict):
        raise DataFileError(f"Data file '{file_path}' must contain a JSON object")
    return data


def _load_excel(file_path: Path, row: int) -> Dict[str, Any]:
    if row < 2:
        raise DataFileError("Excel data row must be 2 or greater; row 1 holds field names")
    try:
        wb = load_workbook(file_path, read_only=True, data_only=True)
    except Exception as e:
        raise DataFileError(f"Cannot read Excel data file '{file_path}': {e}")

    try:
        sheet = wb.active
        rows = list(sheet.iter_rows(min_row=1, max_row=row, values_only=True))
    finally:
        wb.close()

    if len(rows) < row or all(value is None for value in rows[row - 1]):
        raise DataFileError(f"Excel data file '{file_path}' has no values in row {row}")

    headers, values = rows[0], rows[row - 1]
    data: Dict[str, Any] = {}
    for i, header in enumerate(headers):
        if header is None or str(header).strip() == "":
            continue
        data[str(header)] = values[i] if i < len(values) else None
    return data


def sample_value_map() -> Dict[str, Any]:
    return dict(SAMPLE_FORM_2848)


def write_sample_data(path: Union[str, Path]) -> Path:
    """Write the Form 2848 example values as a JSON data file."""
    file_path = Path(path)
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(SAMPLE_FORM_2848, f, indent=2)
    except OSError as e:
        raise DataFileError(f"Cannot write sample data to {path}: {e}")
    return file_path
