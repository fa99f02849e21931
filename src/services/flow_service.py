"""Glue between the registration flow state and the registration service."""
import logging
from typing import Optional

from src.models.registration_flow import (
    RegistrationFlowState,
    apply_email_check,
    submission_failed,
    submission_succeeded,
    validate_form,
)
from src.services.registration_service import check_email_availability, register
from src.services.storage_service import RegistrationStore
from src.utils.exceptions import DuplicateEmailError, StoreUnavailableError, ValidationError
from src.utils.validation import validate_email

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Registration failed. Please try again later."


def check_form_email(state: RegistrationFlowState, store: Optional[RegistrationStore] = None) -> RegistrationFlowState:
    """
    Run inline email feedback for the current form.

    Format errors are reported without a lookup; well-formed emails are
    checked for availability.
    """
    is_valid, message = validate_email(state.fields["email"])
    if not is_valid:
        return submission_failed(state, message, field_name="email")

    try:
        available = check_email_availability(state.fields["email"], store=store)
    except StoreUnavailableError:
        return apply_email_check(state, None)
    return apply_email_check(state, available)


def submit_registration_form(state: RegistrationFlowState, store: Optional[RegistrationStore] = None) -> RegistrationFlowState:
    """
    Validate the form and register on success.

    Returns:
        Success state, or the form state carrying field/banner errors
    """
    state = validate_form(state)
    if state.has_errors:
        return state

    try:
        register(state.payload(), store=store)
    except ValidationError as e:
        state_with_errors = state
        for name, error in e.errors.items():
            state_with_errors = submission_failed(state_with_errors, error.message, field_name=name)
        return state_with_errors
    except DuplicateEmailError as e:
        return submission_failed(state, str(e), field_name="email")
    except StoreUnavailableError:
        return submission_failed(state, GENERIC_FAILURE_MESSAGE)

    return submission_succeeded(state)
