"""Tests for the result envelopes."""

from __future__ import annotations

from release_merger.models.github import MergeResponse
from release_merger.models.results import OperationResult


def test_success_body_carries_every_legacy_flag() -> None:
    body = OperationResult.success("done", data=42).to_body()
    assert body == {"ok": True, "success": True, "status": "success", "message": "done", "data": 42}


def test_failure_body_without_data_omits_it() -> None:
    body = OperationResult.failure("nope").to_body()
    assert body == {"ok": False, "success": False, "status": "error", "message": "nope"}


def test_model_data_is_dumped_to_json_types() -> None:
    merge = MergeResponse(sha="abc", merged=False, message="Merge rejected")
    body = OperationResult.failure("rejected", data=merge).to_body()
    assert body["data"] == {"sha": "abc", "merged": False, "message": "Merge rejected"}
