from __future__ import annotations

from pydantic import TypeAdapter

from publish.models import INITIAL_OUTCOME, ErrorOutcome, IdleOutcome, ShareOutcome, SuccessOutcome


def test_outcome_variants_are_discriminated_by_status():
    adapter = TypeAdapter(ShareOutcome)

    assert isinstance(adapter.validate_python({"status": "idle"}), IdleOutcome)
    assert adapter.validate_python({"status": "success", "message": "ok"}) == SuccessOutcome(message="ok")
    error = adapter.validate_python({"status": "error", "message": "nope", "kind": "delivery"})
    assert error == ErrorOutcome(message="nope", kind="delivery")


def test_initial_outcome_is_idle():
    assert INITIAL_OUTCOME.model_dump() == {"status": "idle"}
