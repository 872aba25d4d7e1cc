"""
FastAPI Endpoints for Claim Intake

Provides a REST API for filling in, validating and submitting death claims.
Each session drives its own ClaimWorkflow.
"""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from claim_intake import config
from claim_intake.core.errors import SubmissionInProgressError, WorkflowTransitionError
from claim_intake.core.models import (
    ATTACHMENT_SLOTS,
    TEXT_FIELDS,
    Attachment,
    AuditLogEntry,
    SubmissionOutcome,
    required_documents,
)
from claim_intake.core.states import WorkflowState
from claim_intake.state_machine.machine import ClaimWorkflow
from claim_intake.submission.client import SubmissionClient

logger = logging.getLogger(__name__)

# Initialize router
router = APIRouter(prefix="/sessions", tags=["sessions"])

# In-memory store for sessions (claims are not persisted)
sessions_store: Dict[str, ClaimWorkflow] = {}

submission_client = SubmissionClient()


class AttachmentInfo(BaseModel):
    """Attachment metadata; file bytes are never echoed back."""
    name: str
    size: int
    content_type: str


class SessionView(BaseModel):
    """Claimant-facing view of a session."""
    session_id: str
    state: WorkflowState
    fields: Dict[str, str]
    attachments: Dict[str, Optional[AttachmentInfo]]
    police_report_required: bool
    errors: Dict[str, str]
    outcome: Optional[SubmissionOutcome] = None
    claim_reference: Optional[str] = None


class SessionResponse(BaseModel):
    """Response model for session operations."""
    session: SessionView
    message: str
    next_valid_states: List[WorkflowState]


class ValidationResponse(BaseModel):
    """Response model for an explicit validation."""
    session_id: str
    valid: bool
    errors: Dict[str, str]


class HistoryResponse(BaseModel):
    """Response model for the session audit trail."""
    session_id: str
    state: WorkflowState
    state_history: List[WorkflowState]
    audit_log: List[AuditLogEntry]


class RequirementsResponse(BaseModel):
    """Documents the claimant must provide, and the accepted formats."""
    cause_of_death: Optional[str]
    required_documents: List[str]
    accepted_file_types: List[str]
    max_document_size_mb: int


def _get_workflow(session_id: str) -> ClaimWorkflow:
    workflow = sessions_store.get(session_id)
    if not workflow:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found"
        )
    return workflow


def _to_view(workflow: ClaimWorkflow) -> SessionView:
    form = workflow.form
    attachments = {}
    for slot in ATTACHMENT_SLOTS:
        attachment = getattr(form, slot)
        attachments[slot] = (
            AttachmentInfo(name=attachment.name, size=attachment.size, content_type=attachment.content_type)
            if attachment else None
        )

    outcome = workflow.outcome
    return SessionView(
        session_id=workflow.session.id,
        state=workflow.state,
        fields={field: getattr(form, field) for field in TEXT_FIELDS},
        attachments=attachments,
        police_report_required=form.police_report_required,
        errors=dict(workflow.errors),
        outcome=outcome,
        claim_reference=outcome.display_reference(form.policy_number) if outcome else None
    )


def _respond(workflow: ClaimWorkflow, message: str) -> SessionResponse:
    return SessionResponse(
        session=_to_view(workflow),
        message=message,
        next_valid_states=workflow.get_valid_transitions()
    )


@router.get("/requirements", response_model=RequirementsResponse)
async def get_requirements(cause_of_death: Optional[str] = None) -> RequirementsResponse:
    """
    List the documents required for a cause of death.

    A police report is only required for Accident and Suicide.
    """
    return RequirementsResponse(
        cause_of_death=cause_of_death,
        required_documents=required_documents(cause_of_death or ""),
        accepted_file_types=config.ACCEPTED_FILE_TYPES,
        max_document_size_mb=config.MAX_DOCUMENT_SIZE_MB
    )


@router.post("/", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session() -> SessionResponse:
    """
    Start a new claim session.

    The session starts IDLE with an empty form.
    """
    workflow = ClaimWorkflow(client=submission_client)
    sessions_store[workflow.session.id] = workflow

    logger.info(f"Created new claim session {workflow.session.id}")

    return _respond(workflow, f"Session created successfully with ID {workflow.session.id}")


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    """
    Get the current state of a session.
    """
    workflow = _get_workflow(session_id)
    return _respond(workflow, f"Session {session_id} retrieved")


@router.patch("/{session_id}/fields", response_model=SessionResponse)
async def update_fields(session_id: str, updates: Dict[str, str]) -> SessionResponse:
    """
    Update one or more text fields.

    Each updated field loses its error message; nothing is re-validated.
    """
    workflow = _get_workflow(session_id)

    unknown = [name for name in updates if name not in TEXT_FIELDS]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown fields: {unknown}. Valid fields: {list(TEXT_FIELDS)}"
        )

    for name, value in updates.items():
        workflow.set_field(name, value)

    return _respond(workflow, f"Updated {len(updates)} field(s)")


@router.put("/{session_id}/attachments/{slot}", response_model=SessionResponse)
async def upload_attachment(
    session_id: str,
    slot: str,
    file: UploadFile = File(..., description="PDF, JPG, JPEG or PNG document")
) -> SessionResponse:
    """
    Attach a document to one of the four slots.

    A zero-byte upload is stored but counts as not attached.
    """
    workflow = _get_workflow(session_id)

    if slot not in ATTACHMENT_SLOTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown attachment slot '{slot}'. Valid slots: {list(ATTACHMENT_SLOTS)}"
        )

    content = await file.read()
    attachment = Attachment.from_bytes(
        name=file.filename or slot,
        content=content,
        content_type=file.content_type or "application/octet-stream"
    )
    workflow.set_attachment(slot, attachment)

    logger.info(f"Session {session_id}: attached {attachment.name} to {slot} ({attachment.size} bytes)")

    return _respond(workflow, f"Attached {attachment.name} as {slot}")


@router.delete("/{session_id}/attachments/{slot}", response_model=SessionResponse)
async def remove_attachment(session_id: str, slot: str) -> SessionResponse:
    """
    Clear one attachment slot.
    """
    workflow = _get_workflow(session_id)

    if slot not in ATTACHMENT_SLOTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown attachment slot '{slot}'. Valid slots: {list(ATTACHMENT_SLOTS)}"
        )

    workflow.set_attachment(slot, None)
    return _respond(workflow, f"Cleared {slot}")


@router.post("/{session_id}/validate", response_model=ValidationResponse)
async def validate_session(session_id: str) -> ValidationResponse:
    """
    Validate the form without submitting it.
    """
    workflow = _get_workflow(session_id)
    errors = workflow.validate()
    return ValidationResponse(session_id=session_id, valid=not errors, errors=errors)


@router.post("/{session_id}/submit", response_model=SessionResponse)
async def submit_session(session_id: str) -> SessionResponse:
    """
    Validate and submit the claim to the adjudication service.

    An invalid form stays IDLE with its errors. Transport failures resolve
    as Manual Review rather than failing the request.
    """
    workflow = _get_workflow(session_id)

    try:
        new_state = await workflow.submit()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except WorkflowTransitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if new_state == WorkflowState.IDLE:
        message = f"Submission refused: {len(workflow.errors)} field(s) need attention"
    else:
        message = f"Claim resolved: {workflow.outcome.status.value}"

    return _respond(workflow, message)


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(session_id: str) -> SessionResponse:
    """
    Clear the form, errors and outcome to start another claim.
    """
    workflow = _get_workflow(session_id)

    try:
        workflow.reset()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return _respond(workflow, "Session reset")


@router.get("/{session_id}/history", response_model=HistoryResponse)
async def get_session_history(session_id: str) -> HistoryResponse:
    """
    Get the state history and audit trail of a session.
    """
    workflow = _get_workflow(session_id)
    return HistoryResponse(
        session_id=session_id,
        state=workflow.state,
        state_history=workflow.session.state_history,
        audit_log=workflow.session.audit_log
    )
