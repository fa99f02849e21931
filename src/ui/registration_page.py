"""Public registration page: landing, student/professional form, success."""
import html
import logging

import streamlit as st

from src.models.registration import RegistrationType
from src.models.registration_flow import (
    FORM_FIELDS,
    VIEW_LANDING,
    VIEW_SUCCESS,
    RegistrationFlowState,
    go_back,
    register_another,
    start_form,
    update_field,
)
from src.services.flow_service import check_form_email, submit_registration_form
from src.ui.html_utils import html_block, pill
from src.utils.config import get_settings

logger = logging.getLogger(__name__)

FLOW_STATE_KEY = "registration_flow_state"

TYPE_BADGE_STYLES = {
    RegistrationType.STUDENT: "linear-gradient(135deg, #004E89 0%, #1A659E 100%)",
    RegistrationType.PROFESSIONAL: "linear-gradient(135deg, #FF6B35 0%, #F7B801 100%)",
}

FIELD_LABELS = {
    "name": ("Name *", "Enter your full name"),
    "email": ("Email *", "your.email@example.com"),
    "company": ("Company *", "Your company name"),
    "phone": ("Phone (Optional)", "12345 67890"),
}


def _field_key(name: str) -> str:
    """Build widget key for a form field."""
    return f"registration_field_{name}"


def _get_flow_state() -> RegistrationFlowState:
    if FLOW_STATE_KEY not in st.session_state:
        st.session_state[FLOW_STATE_KEY] = RegistrationFlowState()
    return st.session_state[FLOW_STATE_KEY]


def _set_flow_state(state: RegistrationFlowState) -> None:
    st.session_state[FLOW_STATE_KEY] = state


def _reset_field_widgets() -> None:
    for name in FORM_FIELDS:
        st.session_state.pop(_field_key(name), None)


def _render_type_badge(registration_type: RegistrationType) -> str:
    """Render HTML badge for a registration type."""
    return pill(registration_type.label, TYPE_BADGE_STYLES[registration_type])


def _render_field_error(message: str) -> str:
    """Render inline error text under a form field."""
    return html_block(f"""
        <span style="color: #EF476F; font-size: 0.85rem; font-weight: 500;">
            {html.escape(message)}
        </span>
    """)


def _success_message(state: RegistrationFlowState) -> str:
    """Confirmation text for the success view."""
    submitted = state.submitted
    if submitted is None:
        return "Registration complete."
    return (
        f"Thank you for registering as a {submitted.registration_type.value}. "
        f"A confirmation will be sent to {submitted.email}."
    )


def _on_start(registration_type: RegistrationType) -> None:
    _reset_field_widgets()
    _set_flow_state(start_form(_get_flow_state(), registration_type))


def _on_back() -> None:
    _reset_field_widgets()
    _set_flow_state(go_back(_get_flow_state()))


def _on_field_change(name: str) -> None:
    state = update_field(_get_flow_state(), name, st.session_state.get(_field_key(name), ""))
    if name == "phone":
        st.session_state[_field_key(name)] = state.fields["phone"]
    if name == "email" and state.fields["email"].strip():
        state = check_form_email(state)
    _set_flow_state(state)


def _on_submit() -> None:
    state = submit_registration_form(_get_flow_state())
    if state.view == VIEW_SUCCESS:
        _reset_field_widgets()
        logger.info("Registration form submitted for %s", state.submitted.email)
    _set_flow_state(state)


def _on_register_another() -> None:
    _set_flow_state(register_another(_get_flow_state()))


def _render_header() -> None:
    settings = get_settings()
    st.markdown(html_block(f"""
        <div style="text-align: center; margin-bottom: 3rem;">
            <h1 style="font-size: 3rem; letter-spacing: 0.1em; text-transform: uppercase; color: #F4F4F9;">
                {html.escape(settings.conference_name)}
            </h1>
            <p style="font-size: 1.3rem; color: #F7B801; font-weight: 500;">
                {html.escape(settings.conference_tagline)}
            </p>
        </div>
    """), unsafe_allow_html=True)


def _render_landing() -> None:
    col_student, col_professional = st.columns(2, gap="large")
    with col_student:
        st.button(
            "🎓 Register as Student",
            key="registration_start_student",
            use_container_width=True,
            type="primary",
            on_click=_on_start,
            args=(RegistrationType.STUDENT,),
        )
    with col_professional:
        st.button(
            "💼 Register as Professional",
            key="registration_start_professional",
            use_container_width=True,
            type="primary",
            on_click=_on_start,
            args=(RegistrationType.PROFESSIONAL,),
        )


def _render_form(state: RegistrationFlowState) -> None:
    title_col, badge_col = st.columns([3, 1])
    with title_col:
        st.markdown("### Registration Form")
    with badge_col:
        st.markdown(_render_type_badge(state.registration_type), unsafe_allow_html=True)

    if state.error:
        st.error(f"❌ {state.error}")

    visible_fields = [
        name for name in FORM_FIELDS
        if name != "company" or state.registration_type == RegistrationType.PROFESSIONAL
    ]
    for name in visible_fields:
        label, placeholder = FIELD_LABELS[name]
        key = _field_key(name)
        if key not in st.session_state:
            st.session_state[key] = state.fields[name]
        st.text_input(
            label,
            key=key,
            placeholder=placeholder,
            on_change=_on_field_change,
            args=(name,),
        )
        message = state.field_errors.get(name)
        if message:
            st.markdown(_render_field_error(message), unsafe_allow_html=True)

    back_col, submit_col = st.columns(2, gap="small")
    with back_col:
        st.button("Back", key="registration_back", use_container_width=True, on_click=_on_back)
    with submit_col:
        st.button(
            "Complete Registration",
            key="registration_submit",
            use_container_width=True,
            type="primary",
            on_click=_on_submit,
        )


def _render_success(state: RegistrationFlowState) -> None:
    st.success("🎉 Registration Successful!")
    st.markdown(_success_message(state))
    st.button(
        "Register Another",
        key="registration_another",
        use_container_width=True,
        on_click=_on_register_another,
    )


def render_registration_page() -> None:
    """Render the public registration flow for the current state."""
    _render_header()

    state = _get_flow_state()
    if state.view == VIEW_LANDING:
        _render_landing()
    elif state.in_form:
        _render_form(state)
    elif state.view == VIEW_SUCCESS:
        _render_success(state)
    else:
        st.error(f"Unknown view: {state.view}")
        _set_flow_state(RegistrationFlowState())
