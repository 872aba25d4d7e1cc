"""
Claimant Portal - Life Insurance Death Claim Submission

A Streamlit application for filing a death claim. The form, its inline
errors and the submission itself are driven by a ClaimWorkflow kept in the
Streamlit session.
"""
import asyncio
import logging
from typing import Optional

import streamlit as st

from claim_intake import config
from claim_intake.core.errors import SubmissionInProgressError
from claim_intake.core.models import Attachment, CauseOfDeath, NomineeRelationship
from claim_intake.core.states import OutcomeStatus, WorkflowState
from claim_intake.state_machine.machine import ClaimWorkflow
from claim_intake.submission.client import SubmissionClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================
# PAGE CONFIG & STYLING
# ============================================

st.set_page_config(
    page_title="Death Claim Submission",
    page_icon="📄",
    layout="centered",
    initial_sidebar_state="collapsed"
)

st.markdown("""
<style>
    .main-header {
        background: linear-gradient(135deg, #1e3a8a 0%, #2563eb 100%);
        padding: 2rem;
        border-radius: 16px;
        color: white;
        text-align: center;
        margin-bottom: 2rem;
    }

    .main-header h1 {
        margin: 0;
        font-size: 2rem;
        font-weight: 700;
    }

    .main-header p {
        margin: 0.5rem 0 0 0;
        opacity: 0.9;
    }

    .outcome-box {
        padding: 1.5rem;
        border-radius: 16px;
        text-align: center;
        margin: 1rem 0;
        color: white;
    }

    .outcome-approved {background: #16a34a;}
    .outcome-rejected {background: #dc2626;}
    .outcome-review {background: #d97706;}

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

DOCUMENT_LABELS = {
    "claim_form": "Claim Form *",
    "death_certificate": "Death Certificate *",
    "doctor_report": "Doctor Report *",
    "police_report": "Police Report *",
}

OUTCOME_STYLES = {
    OutcomeStatus.APPROVED: ("outcome-approved", "✅ Claim Approved"),
    OutcomeStatus.REJECTED: ("outcome-rejected", "❌ Claim Rejected"),
    OutcomeStatus.MANUAL_REVIEW: ("outcome-review", "⚠️ Manual Review Required"),
}


# ============================================
# SESSION HELPERS
# ============================================

def get_workflow() -> ClaimWorkflow:
    """Get the claimant's workflow, creating it on first use."""
    if "workflow" not in st.session_state:
        st.session_state.workflow = ClaimWorkflow(client=SubmissionClient())
        st.session_state.form_nonce = 0
        st.session_state.display_reference = None
    return st.session_state.workflow


def widget_key(name: str) -> str:
    """Widget keys change on reset so every input starts empty again."""
    return f"{name}_{st.session_state.form_nonce}"


def to_attachment(uploaded) -> Optional[Attachment]:
    """Convert a Streamlit upload into an Attachment."""
    if uploaded is None:
        return None
    return Attachment(
        name=uploaded.name,
        size=uploaded.size,
        content=uploaded.getvalue(),
        content_type=uploaded.type or "application/octet-stream"
    )


def on_field_change(name: str) -> None:
    workflow = get_workflow()
    workflow.set_field(name, st.session_state[widget_key(name)] or "")

    # Hidden police report input must not linger once it is no longer required
    if name == "cause_of_death" and not workflow.form.police_report_required:
        workflow.set_attachment("police_report", None)


def on_attachment_change(slot: str) -> None:
    get_workflow().set_attachment(slot, to_attachment(st.session_state[widget_key(slot)]))


# ============================================
# UI COMPONENTS
# ============================================

def render_header():
    """Render the main header."""
    st.markdown("""
    <div class="main-header">
        <h1>📄 Death Claim Submission</h1>
        <p>Submit a life insurance death claim</p>
    </div>
    """, unsafe_allow_html=True)


def render_error(field: str) -> None:
    message = get_workflow().errors.get(field)
    if message:
        st.markdown(f":red[{message}]")


def render_text_input(label: str, name: str, placeholder: str = "", disabled: bool = False) -> None:
    st.text_input(
        label,
        key=widget_key(name),
        placeholder=placeholder,
        on_change=on_field_change,
        args=(name,),
        disabled=disabled
    )
    render_error(name)


def render_select(label: str, name: str, options: list[str], disabled: bool = False) -> None:
    st.selectbox(
        label,
        options=[""] + options,
        format_func=lambda value: value or "Select...",
        key=widget_key(name),
        on_change=on_field_change,
        args=(name,),
        disabled=disabled
    )
    render_error(name)


def render_uploader(slot: str, disabled: bool = False) -> None:
    st.file_uploader(
        DOCUMENT_LABELS[slot],
        type=config.ACCEPTED_FILE_TYPES,
        key=widget_key(slot),
        on_change=on_attachment_change,
        args=(slot,),
        disabled=disabled,
        help=f"PDF, JPG, JPEG or PNG, up to {config.MAX_DOCUMENT_SIZE_MB} MB"
    )
    render_error(slot)


def render_submission_form():
    """Render the claim submission form."""
    workflow = get_workflow()
    busy = workflow.is_submitting

    if workflow.errors:
        st.error(f"Please correct the {len(workflow.errors)} highlighted field(s) and submit again.")

    st.subheader("📋 Policy Details")
    render_text_input("Policy Number *", "policy_number", "e.g., POL-123456", busy)
    render_select("Cause of Death *", "cause_of_death", [c.value for c in CauseOfDeath], busy)

    st.divider()
    st.subheader("🧾 Deceased Details")
    render_text_input("Full Name *", "full_name", disabled=busy)
    render_text_input("Email *", "email", "name@example.com", busy)
    render_text_input("Mobile Number *", "mobile_number", "10-digit mobile number", busy)
    render_text_input("Address *", "address", disabled=busy)

    st.divider()
    st.subheader("👤 Nominee Details")
    render_text_input("Nominee Full Name *", "nominee_full_name", disabled=busy)
    render_select(
        "Relationship *",
        "nominee_relationship",
        [r.value for r in NomineeRelationship],
        busy
    )
    render_text_input("Nominee Mobile Number *", "nominee_mobile_number", "10-digit mobile number", busy)

    st.divider()
    st.subheader("📎 Documents")
    st.caption(
        f"Accepted formats: {', '.join(t.upper() for t in config.ACCEPTED_FILE_TYPES)}. "
        f"Maximum {config.MAX_DOCUMENT_SIZE_MB} MB per document."
    )
    render_uploader("claim_form", busy)
    render_uploader("death_certificate", busy)
    render_uploader("doctor_report", busy)
    if workflow.form.police_report_required:
        render_uploader("police_report", busy)

    st.divider()

    if st.button("🚀 Submit Claim", use_container_width=True, type="primary", disabled=busy):
        process_claim_submission(workflow)


def process_claim_submission(workflow: ClaimWorkflow):
    """Run one submission and move to the outcome view when it resolves."""
    try:
        with st.spinner("Submitting your claim..."):
            new_state = asyncio.run(workflow.submit())
    except SubmissionInProgressError:
        st.warning("Your claim is already being submitted. Please wait.")
        return

    if new_state == WorkflowState.IDLE:
        # Rerun so the inline errors render next to their inputs
        st.rerun()

    st.session_state.display_reference = workflow.outcome.display_reference(workflow.form.policy_number)
    st.rerun()


def render_outcome():
    """Render the outcome page for a resolved claim."""
    workflow = get_workflow()
    outcome = workflow.outcome
    css_class, title = OUTCOME_STYLES[outcome.status]

    st.markdown(f"""
    <div class="outcome-box {css_class}">
        <h2 style="margin: 0;">{title}</h2>
    </div>
    """, unsafe_allow_html=True)

    st.info(f"📋 {outcome.display_reason()}")

    reference = st.session_state.display_reference or outcome.display_reference(workflow.form.policy_number)
    st.markdown(f"**Claim Reference:** `{reference}`")
    if not outcome.claim_reference:
        st.caption("Keep this reference when contacting support about your claim.")

    st.markdown("---")

    if st.button("📝 Submit Another Claim", use_container_width=True):
        workflow.reset()
        st.session_state.form_nonce += 1
        st.session_state.display_reference = None
        st.rerun()


# ============================================
# MAIN APPLICATION
# ============================================

def main():
    """Main application entry point."""
    workflow = get_workflow()

    with st.sidebar:
        st.header("⚙️ Settings")
        api_url = st.text_input(
            "Adjudication Service URL",
            value=config.get_claim_api_url(),
            help="Base address of the claim adjudication service"
        )
        config.set_claim_api_url(api_url or None)

    render_header()

    if workflow.state == WorkflowState.RESOLVED:
        render_outcome()
    else:
        render_submission_form()


if __name__ == "__main__":
    main()
