"""Result envelopes passed between release steps."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class MatchResult(BaseModel):
    """Outcome of testing one pull request title against one ticket key."""
    success: bool
    message: str
    data: Optional[str] = None


class MergeDecision(BaseModel):
    """Outcome of the mergeability check."""
    status: bool
    message: str


class OperationResult(BaseModel):
    """Uniform result of every release step.

    Business failures are returned as ``ok=False`` results; transport
    failures are raised as ``GitHubAPIError`` instead.
    """
    ok: bool
    message: str
    data: Any = None

    @classmethod
    def success(cls, message: str, data: Any = None) -> "OperationResult":
        return cls(ok=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str, data: Any = None) -> "OperationResult":
        return cls(ok=False, message=message, data=data)

    def to_body(self) -> Dict[str, Any]:
        """Serialize for a webhook response.

        Older consumers read either a boolean ``success`` or a
        ``"success"``/``"error"`` ``status`` string, so both are emitted
        alongside ``ok``.
        """
        body = {
            "ok": self.ok,
            "success": self.ok,
            "status": "success" if self.ok else "error",
            "message": self.message,
        }
        if self.data is not None:
            body["data"] = self.data.model_dump(mode="json") if isinstance(self.data, BaseModel) else self.data
        return body
