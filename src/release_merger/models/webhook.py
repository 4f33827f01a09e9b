"""Inbound webhook payload model."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WebhookPayload(BaseModel):
    """Ticket transition sent by the issue tracker automation.

    Values are kept verbatim; they are matched against titles and echoed into
    the approval comment as sent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project: str = Field(..., min_length=1)
    ticket_key: str = Field(..., alias="key", min_length=1)
    ticket_status: str = Field(..., alias="status", min_length=1)
    repo_name: str = Field(..., alias="github_repo_name", min_length=1)
    repo_owner: str = Field(..., alias="github_repo_owner", min_length=1)

    @field_validator("project", "ticket_key", "ticket_status", "repo_name", "repo_owner")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v
