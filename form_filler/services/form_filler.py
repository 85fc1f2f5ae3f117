"""Service for applying field values to a PDF form."""
import json
import logging
from typing import Any, Callable, Dict, Mapping

from form_filler.domain.exceptions import InvalidOptionError
from form_filler.domain.models import (
    ApplicationOutcome,
    ApplicationReport,
    FieldKind,
    FormField,
)
from form_filler.services.field_directory import FieldDirectory
from form_filler.utils.widget_helpers import export_value, is_editable_choice, on_state

logger = logging.getLogger(__name__)

FIELD_NOT_FOUND = "field not found"
INVALID_OPTION = "invalid option"
UNSUPPORTED_FIELD_TYPE = "unsupported field type"

Handler = Callable[[FieldDirectory, FormField, Any], ApplicationOutcome]


def coerce_text(value: Any) -> str:
    """Coerce a field value to the string written into a text or choice field."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FormFiller:
    """Service for filling PDF form fields with data.

    Every entry of the value map gets exactly one outcome. Problems with a
    single field are recorded as skipped outcomes and never stop the run.
    """

    def __init__(self):
        self._handlers: Dict[FieldKind, Handler] = {
            FieldKind.TEXT_FIELD: self._set_text,
            FieldKind.CHECK_BOX: self._set_checkbox,
            FieldKind.RADIO_GROUP: self._select_radio,
            FieldKind.DROPDOWN: self._select_dropdown,
            FieldKind.UNSUPPORTED: self._unsupported,
        }

    def apply(self, directory: FieldDirectory, values: Mapping[str, Any]) -> ApplicationReport:
        """Apply a value map to the fields of a directory."""
        report = ApplicationReport(
            outcomes=[self._apply_entry(directory, name, value) for name, value in values.items()]
        )
        logger.info(
            "Successfully filled %d of %d fields", report.applied_count, report.total_attempted
        )
        return report

    def _apply_entry(self, directory: FieldDirectory, name: str, value: Any) -> ApplicationOutcome:
        form_field = directory.get(name)
        if form_field is None:
            outcome = ApplicationOutcome.skipped(name, FIELD_NOT_FOUND)
        else:
            try:
                outcome = self._handlers[form_field.kind](directory, form_field, value)
            except InvalidOptionError:
                outcome = ApplicationOutcome.skipped(name, INVALID_OPTION)
            except Exception as e:
                outcome = ApplicationOutcome.skipped(name, f"error: {e}")

        if not outcome.is_applied:
            logger.warning("Skipped field '%s': %s", name, outcome.reason)
        return outcome

    def _set_text(self, directory: FieldDirectory, form_field: FormField, value: Any) -> ApplicationOutcome:
        text = coerce_text(value)
        for widget in directory.widgets(form_field.name):
            widget.field_value = text
            widget.update()
        return ApplicationOutcome.applied(form_field.name)

    def _set_checkbox(self, directory: FieldDirectory, form_field: FormField, value: Any) -> ApplicationOutcome:
        # Only the boolean True checks the box; "true", 1 and "yes" uncheck it.
        checked = value is True
        for widget in directory.widgets(form_field.name):
            widget.field_value = checked
            widget.update()
        return ApplicationOutcome.applied(form_field.name)

    def _select_radio(self, directory: FieldDirectory, form_field: FormField, value: Any) -> ApplicationOutcome:
        option = coerce_text(value)
        if option not in form_field.options:
            raise InvalidOptionError(form_field.name, option)

        # Buttons are switched off before the selected one is switched on.
        widgets = sorted(directory.widgets(form_field.name), key=lambda w: on_state(w) == option)
        for widget in widgets:
            widget.field_value = on_state(widget) == option
            widget.update()
        return ApplicationOutcome.applied(form_field.name)

    def _select_dropdown(self, directory: FieldDirectory, form_field: FormField, value: Any) -> ApplicationOutcome:
        option = coerce_text(value)
        widgets = directory.widgets(form_field.name)
        if option not in form_field.options and not (widgets and is_editable_choice(widgets[0])):
            raise InvalidOptionError(form_field.name, option)

        for widget in widgets:
            widget.field_value = export_value(widget, option)
            widget.update()
        return ApplicationOutcome.applied(form_field.name)

    def _unsupported(self, directory: FieldDirectory, form_field: FormField, value: Any) -> ApplicationOutcome:
        return ApplicationOutcome.skipped(form_field.name, UNSUPPORTED_FIELD_TYPE)
