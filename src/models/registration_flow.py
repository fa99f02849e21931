"""Public registration flow state and transitions.

The flow moves landing -> student/professional form -> success. Each
transition takes the current state and returns a new one; the Streamlit page
keeps the latest state in session state.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from src.models.registration import RegistrationType
from src.utils.validation import format_phone, validate_registration

VIEW_LANDING = "landing"
VIEW_STUDENT_FORM = "student-form"
VIEW_PROFESSIONAL_FORM = "professional-form"
VIEW_SUCCESS = "success"

FORM_VIEWS = {
    RegistrationType.STUDENT: VIEW_STUDENT_FORM,
    RegistrationType.PROFESSIONAL: VIEW_PROFESSIONAL_FORM,
}

FORM_FIELDS = ("name", "email", "company", "phone")

EMAIL_TAKEN_MESSAGE = "Email is already registered"
EMAIL_UNVERIFIED_MESSAGE = "Unable to verify email"


def _empty_fields() -> Dict[str, str]:
    return {name: "" for name in FORM_FIELDS}


@dataclass(frozen=True)
class SubmittedRegistration:
    """What the success view shows."""

    email: str
    registration_type: RegistrationType


@dataclass(frozen=True)
class RegistrationFlowState:
    """Snapshot of the public registration flow."""

    view: str = VIEW_LANDING
    fields: Dict[str, str] = field(default_factory=_empty_fields)
    field_errors: Dict[str, str] = field(default_factory=dict)
    error: str = ""
    submitted: Optional[SubmittedRegistration] = None

    @property
    def registration_type(self) -> Optional[RegistrationType]:
        """Registration type for the current form view, if any."""
        for registration_type, view in FORM_VIEWS.items():
            if view == self.view:
                return registration_type
        return None

    @property
    def in_form(self) -> bool:
        return self.view in FORM_VIEWS.values()

    @property
    def has_errors(self) -> bool:
        return any(self.field_errors.values())

    def payload(self) -> Dict[str, Optional[str]]:
        """Build the register() payload from the form fields."""
        if not self.in_form:
            raise ValueError(f"No form to submit in view: {self.view}")
        return {
            "name": self.fields["name"],
            "email": self.fields["email"],
            "registration_type": self.registration_type.value,
            "company": self.fields["company"] or None,
            "phone": self.fields["phone"] or None,
        }


def _require_form(state: RegistrationFlowState, action: str) -> None:
    if not state.in_form:
        raise ValueError(f"Cannot {action} from view: {state.view}")


def start_form(state: RegistrationFlowState, registration_type) -> RegistrationFlowState:
    """Landing -> form for the given type. Fields and errors are reset."""
    if state.view != VIEW_LANDING:
        raise ValueError(f"Cannot start a form from view: {state.view}")
    registration_type = RegistrationType(registration_type)
    return RegistrationFlowState(view=FORM_VIEWS[registration_type])


def go_back(state: RegistrationFlowState) -> RegistrationFlowState:
    """Form -> landing, discarding input."""
    _require_form(state, "go back")
    return RegistrationFlowState()


def update_field(state: RegistrationFlowState, name: str, value: str) -> RegistrationFlowState:
    """Set a form field and clear its error. Phone input is re-formatted."""
    _require_form(state, "edit a field")
    if name not in FORM_FIELDS:
        raise ValueError(f"Unknown form field: {name}")

    value = value or ""
    if name == "phone":
        value = format_phone(value)

    fields = dict(state.fields)
    fields[name] = value
    field_errors = {key: msg for key, msg in state.field_errors.items() if key != name}
    return replace(state, fields=fields, field_errors=field_errors)


def apply_email_check(state: RegistrationFlowState, available: Optional[bool]) -> RegistrationFlowState:
    """
    Record the result of an email availability lookup.

    Args:
        available: True/False from the lookup, None if the lookup failed
    """
    _require_form(state, "check email")
    field_errors = dict(state.field_errors)
    if available is None:
        field_errors["email"] = EMAIL_UNVERIFIED_MESSAGE
    elif not available:
        field_errors["email"] = EMAIL_TAKEN_MESSAGE
    else:
        field_errors.pop("email", None)
    return replace(state, field_errors=field_errors)


def validate_form(state: RegistrationFlowState) -> RegistrationFlowState:
    """
    Validate all fields at once.

    A pending availability error on the email field is kept when the email
    is otherwise well-formed.
    """
    _require_form(state, "validate")
    errors = validate_registration(state.payload())

    field_errors = {name: error.message for name, error in errors.items()}
    pending_email_error = state.field_errors.get("email")
    if "email" not in field_errors and pending_email_error:
        field_errors["email"] = pending_email_error

    return replace(state, field_errors=field_errors, error="")


def submission_succeeded(state: RegistrationFlowState) -> RegistrationFlowState:
    """Form -> success, remembering what was submitted."""
    _require_form(state, "finish registration")
    return RegistrationFlowState(
        view=VIEW_SUCCESS,
        submitted=SubmittedRegistration(
            email=state.fields["email"],
            registration_type=state.registration_type,
        ),
    )


def submission_failed(state: RegistrationFlowState, message: str, field_name: Optional[str] = None) -> RegistrationFlowState:
    """Stay on the form and show the error on a field or as a banner."""
    _require_form(state, "report a failed submission")
    if field_name:
        field_errors = dict(state.field_errors)
        field_errors[field_name] = message
        return replace(state, field_errors=field_errors)
    return replace(state, error=message)


def register_another(state: RegistrationFlowState) -> RegistrationFlowState:
    """Success -> landing."""
    if state.view != VIEW_SUCCESS:
        raise ValueError(f"Cannot register another from view: {state.view}")
    return RegistrationFlowState()
