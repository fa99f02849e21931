"""Unit tests for flow_service."""
import pytest
from unittest.mock import MagicMock

from src.models.registration import RegistrationType
from src.models.registration_flow import (
    EMAIL_TAKEN_MESSAGE,
    EMAIL_UNVERIFIED_MESSAGE,
    VIEW_PROFESSIONAL_FORM,
    VIEW_STUDENT_FORM,
    VIEW_SUCCESS,
    RegistrationFlowState,
    start_form,
    update_field,
)
from src.services.flow_service import (
    GENERIC_FAILURE_MESSAGE,
    check_form_email,
    submit_registration_form,
)
from src.utils.exceptions import StoreUnavailableError


def _form(registration_type=RegistrationType.STUDENT, **fields):
    state = start_form(RegistrationFlowState(), registration_type)
    for name, value in fields.items():
        state = update_field(state, name, value)
    return state


class TestCheckFormEmail:
    """Test inline email checks."""

    def test_malformed_email_skips_lookup(self):
        store = MagicMock()
        state = check_form_email(_form(email="not-an-email"), store=store)

        assert state.field_errors["email"] == "Invalid email format"
        store.exists.assert_not_called()

    def test_taken_email(self, store):
        submit_registration_form(_form(name="Ada", email="ada@example.com"), store=store)

        state = check_form_email(_form(email="ada@example.com"), store=store)

        assert state.field_errors["email"] == EMAIL_TAKEN_MESSAGE

    def test_available_email(self, store):
        state = check_form_email(_form(email="new@example.com"), store=store)
        assert "email" not in state.field_errors

    def test_lookup_failure(self):
        store = MagicMock()
        store.exists.side_effect = StoreUnavailableError("down")

        state = check_form_email(_form(email="ada@example.com"), store=store)

        assert state.field_errors["email"] == EMAIL_UNVERIFIED_MESSAGE


class TestSubmitRegistrationForm:
    """Test form submission."""

    def test_success(self, store):
        state = submit_registration_form(
            _form(name="Ada Lovelace", email="ada@example.com", phone="1234567890"),
            store=store,
        )

        assert state.view == VIEW_SUCCESS
        assert state.submitted.email == "ada@example.com"
        registration = store.list()[0]
        assert registration.phone == "12345 67890"
        assert registration.company is None

    def test_invalid_form_does_not_write(self):
        store = MagicMock()

        state = submit_registration_form(_form(name="", email="bad"), store=store)

        assert state.view == VIEW_STUDENT_FORM
        assert state.field_errors == {"name": "Name is required", "email": "Invalid email format"}
        store.insert.assert_not_called()

    def test_professional_requires_company(self, store):
        state = submit_registration_form(
            _form(RegistrationType.PROFESSIONAL, name="Grace", email="grace@example.com"),
            store=store,
        )

        assert state.view == VIEW_PROFESSIONAL_FORM
        assert state.field_errors["company"] == "Company is required"
        assert store.count() == 0

    def test_duplicate_email_goes_on_email_field(self, store):
        submit_registration_form(_form(name="Ada", email="ada@example.com"), store=store)

        state = submit_registration_form(_form(name="Ada Again", email="ada@example.com"), store=store)

        assert state.view == VIEW_STUDENT_FORM
        assert state.field_errors["email"] == EMAIL_TAKEN_MESSAGE
        assert store.count() == 1

    def test_store_failure_shows_banner(self):
        store = MagicMock()
        store.exists.side_effect = StoreUnavailableError("down")

        state = submit_registration_form(_form(name="Ada", email="ada@example.com"), store=store)

        assert state.view == VIEW_STUDENT_FORM
        assert state.error == GENERIC_FAILURE_MESSAGE
        assert state.field_errors == {}
