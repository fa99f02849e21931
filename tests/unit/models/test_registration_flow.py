"""Tests for the public registration flow state machine."""
import pytest

from src.models.registration import RegistrationType
from src.models.registration_flow import (
    EMAIL_TAKEN_MESSAGE,
    EMAIL_UNVERIFIED_MESSAGE,
    VIEW_LANDING,
    VIEW_PROFESSIONAL_FORM,
    VIEW_STUDENT_FORM,
    VIEW_SUCCESS,
    RegistrationFlowState,
    apply_email_check,
    go_back,
    register_another,
    start_form,
    submission_failed,
    submission_succeeded,
    update_field,
    validate_form,
)


@pytest.fixture
def student_form():
    return start_form(RegistrationFlowState(), RegistrationType.STUDENT)


@pytest.fixture
def filled_student_form(student_form):
    state = update_field(student_form, "name", "Ada Lovelace")
    return update_field(state, "email", "ada@example.com")


class TestTransitions:
    """Test view transitions."""

    def test_initial_state_is_landing(self):
        state = RegistrationFlowState()
        assert state.view == VIEW_LANDING
        assert state.registration_type is None
        assert state.in_form is False

    def test_start_student_form(self, student_form):
        assert student_form.view == VIEW_STUDENT_FORM
        assert student_form.registration_type is RegistrationType.STUDENT

    def test_start_professional_form_from_string(self):
        state = start_form(RegistrationFlowState(), "professional")
        assert state.view == VIEW_PROFESSIONAL_FORM

    def test_start_form_only_from_landing(self, student_form):
        with pytest.raises(ValueError, match="Cannot start a form"):
            start_form(student_form, RegistrationType.PROFESSIONAL)

    def test_back_resets_fields(self, filled_student_form):
        state = go_back(filled_student_form)

        assert state.view == VIEW_LANDING
        assert state.fields["name"] == ""
        assert state.field_errors == {}

    def test_entering_form_again_starts_empty(self, filled_student_form):
        state = start_form(go_back(filled_student_form), RegistrationType.STUDENT)
        assert all(value == "" for value in state.fields.values())

    def test_back_from_landing_raises_error(self):
        with pytest.raises(ValueError):
            go_back(RegistrationFlowState())

    def test_success_carries_submitted_info(self, filled_student_form):
        state = submission_succeeded(filled_student_form)

        assert state.view == VIEW_SUCCESS
        assert state.submitted.email == "ada@example.com"
        assert state.submitted.registration_type is RegistrationType.STUDENT
        assert state.fields["email"] == ""

    def test_register_another_returns_to_landing(self, filled_student_form):
        state = register_another(submission_succeeded(filled_student_form))

        assert state.view == VIEW_LANDING
        assert state.submitted is None

    def test_register_another_only_from_success(self, student_form):
        with pytest.raises(ValueError, match="Cannot register another"):
            register_another(student_form)


class TestFields:
    """Test field editing and validation."""

    def test_update_field_clears_its_error(self, student_form):
        state = validate_form(student_form)
        assert "name" in state.field_errors

        state = update_field(state, "name", "Ada")

        assert state.fields["name"] == "Ada"
        assert "name" not in state.field_errors
        assert "email" in state.field_errors

    def test_phone_is_formatted(self, student_form):
        state = update_field(student_form, "phone", "123-456-7890")
        assert state.fields["phone"] == "12345 67890"

    def test_unknown_field_raises_error(self, student_form):
        with pytest.raises(ValueError, match="Unknown form field"):
            update_field(student_form, "age", "42")

    def test_validate_form_reports_all_errors(self, student_form):
        state = validate_form(student_form)

        assert state.field_errors == {
            "name": "Name is required",
            "email": "Email is required",
        }
        assert state.has_errors is True

    def test_professional_form_requires_company(self):
        state = start_form(RegistrationFlowState(), RegistrationType.PROFESSIONAL)
        state = update_field(state, "name", "Grace")
        state = update_field(state, "email", "grace@example.com")

        state = validate_form(state)

        assert state.field_errors == {"company": "Company is required"}

    def test_valid_form_has_no_errors(self, filled_student_form):
        assert validate_form(filled_student_form).has_errors is False

    def test_payload(self, filled_student_form):
        assert filled_student_form.payload() == {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "registration_type": "student",
            "company": None,
            "phone": None,
        }

    def test_payload_outside_form_raises_error(self):
        with pytest.raises(ValueError):
            RegistrationFlowState().payload()


class TestEmailCheck:
    """Test inline email availability feedback."""

    def test_taken_email(self, filled_student_form):
        state = apply_email_check(filled_student_form, False)
        assert state.field_errors["email"] == EMAIL_TAKEN_MESSAGE

    def test_available_email_clears_error(self, filled_student_form):
        state = apply_email_check(apply_email_check(filled_student_form, False), True)
        assert "email" not in state.field_errors

    def test_failed_lookup(self, filled_student_form):
        state = apply_email_check(filled_student_form, None)
        assert state.field_errors["email"] == EMAIL_UNVERIFIED_MESSAGE

    def test_validate_keeps_pending_availability_error(self, filled_student_form):
        state = validate_form(apply_email_check(filled_student_form, False))

        assert state.field_errors == {"email": EMAIL_TAKEN_MESSAGE}
        assert state.has_errors is True


class TestSubmissionFailed:
    """Test failure reporting."""

    def test_banner_error(self, filled_student_form):
        state = submission_failed(filled_student_form, "Registration failed")

        assert state.view == VIEW_STUDENT_FORM
        assert state.error == "Registration failed"
        assert state.fields["name"] == "Ada Lovelace"

    def test_field_error(self, filled_student_form):
        state = submission_failed(filled_student_form, EMAIL_TAKEN_MESSAGE, field_name="email")

        assert state.error == ""
        assert state.field_errors["email"] == EMAIL_TAKEN_MESSAGE
