"""Field listing and value template derivation."""
from typing import Any, Dict, List

from form_filler.domain.models import FieldKind
from form_filler.services.field_directory import FieldDirectory

TEMPLATE_PLACEHOLDERS: Dict[FieldKind, Any] = {
    FieldKind.TEXT_FIELD: "",
    FieldKind.CHECK_BOX: False,
    FieldKind.RADIO_GROUP: "",
    FieldKind.DROPDOWN: "",
}


def describe(directory: FieldDirectory) -> List[Dict[str, str]]:
    """List every field as {name, kind} for human inspection."""
    return [{"name": f.name, "kind": f.kind.value} for f in directory.list()]


def derive_template(directory: FieldDirectory) -> Dict[str, Any]:
    """Build an empty value map for a form; unsupported fields are left out."""
    return {
        f.name: TEMPLATE_PLACEHOLDERS[f.kind]
        for f in directory.list()
        if f.kind in TEMPLATE_PLACEHOLDERS
    }
