# =============================================================================
# API Request Models — Pydantic V2 Schemas
# =============================================================================
#
# Request bodies accepted by the HTTP surface. The ledger itself arrives as
# multipart form data (see app/api/analysis.py), not as JSON.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class GoalRequest(BaseModel):
    """
    Request body for POST /goals — add one financial goal.

    Example:
        {"goal": "Save for an emergency fund"}
    """

    goal: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Free-text goal. Trimmed; duplicates (exact match) are ignored.",
        examples=["Save for an emergency fund"],
    )


class ChatRequest(BaseModel):
    """
    Request body for POST /chat — send one message to the orchestrator agent.

    Example:
        {"message": "What's my 3-month spending projection?"}
    """

    message: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        description="The user's message",
        examples=["What's my 3-month spending projection?"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"message": "Why did my electricity bill spike?"},
                {"message": "Can I afford a ₹15,000 purchase?"},
            ]
        }
    )
