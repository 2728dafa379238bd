"""Tests for fault capture and rendering."""

from outcall.diagnostics import (
    UNKNOWN_FILENAME,
    UNKNOWN_LINE,
    UNKNOWN_METHOD,
    CauseRecord,
    FaultRecord,
    FrameRecord,
    SourceLocation,
    capture_fault,
    describe_fault,
    render_fault,
    safe_str,
)
from outcall.errors import OutcallError


def _load_profile(user_id: int, name: str):
    raise KeyError(f"profile {user_id} missing")


def _sync_profile(user_id: int, *args, **kwargs):
    try:
        _load_profile(user_id, "primary")
    except KeyError as exc:
        raise RuntimeError("sync failed") from exc


def _raise(fn, *args):
    try:
        fn(*args)
    except Exception as exc:
        return exc
    raise AssertionError("expected an exception")


class TestCaptureFault:
    def test_type_and_message(self):
        record = capture_fault(_raise(_load_profile, 7, "x"))
        assert record.type_name == "KeyError"
        assert record.message == "'profile 7 missing'"

    def test_location_is_innermost_frame(self):
        record = capture_fault(_raise(_load_profile, 3, "primary"))
        assert record.location is not None
        assert record.location.filename.endswith("test_diagnostics.py")
        assert record.signature == "_load_profile(user_id: int, name: str)"

    def test_signature_includes_star_args(self):
        exc = _raise(_sync_profile, 3)
        record = capture_fault(exc)
        signatures = [frame.signature for frame in record.frames]
        assert "_sync_profile(user_id: int, *args: tuple, **kwargs: dict)" in signatures

    def test_frames_innermost_first(self):
        record = capture_fault(_raise(_sync_profile, 3))
        names = [frame.signature.split("(")[0] for frame in record.frames]
        assert names == ["_sync_profile", "_raise"]

    def test_cause_chain_starts_with_fault(self):
        record = capture_fault(_raise(_sync_profile, 3))
        assert record.causes[0] == CauseRecord(type_name="RuntimeError", message="sync failed")
        assert record.causes[1].type_name == "KeyError"
        assert len(record.causes) == 2

    def test_implicit_context_is_followed(self):
        def handler():
            try:
                raise ValueError("inner")
            except ValueError:
                raise TypeError("outer")

        record = capture_fault(_raise(handler))
        assert [cause.message for cause in record.causes] == ["outer", "inner"]

    def test_explicit_cause_attribute_is_followed(self):
        err = OutcallError("wrapper", cause=ConnectionError("reset"))
        record = capture_fault(err)
        assert [cause.message for cause in record.causes] == ["wrapper", "reset"]

    def test_suppressed_context_is_skipped(self):
        def handler():
            try:
                raise ValueError("hidden")
            except ValueError:
                raise TypeError("shown") from None

        record = capture_fault(_raise(handler))
        assert [cause.message for cause in record.causes] == ["shown"]

    def test_unraised_exception_has_no_frames(self):
        record = capture_fault(ValueError("never raised"))
        assert record.frames == ()
        assert record.location is None
        assert record.signature is None


class TestRenderFault:
    def test_layout(self):
        record = FaultRecord(
            type_name="ConnectError",
            message="refused",
            location=SourceLocation("client.py", 42),
            signature="send(url: str)",
            causes=(
                CauseRecord("ConnectError", "refused"),
                CauseRecord("OSError", "errno 111"),
            ),
            frames=(
                FrameRecord(SourceLocation("client.py", 42), "send(url: str)"),
                FrameRecord(SourceLocation("app.py", 10), "main()"),
            ),
        )
        assert render_fault(record) == (
            "send(url: str) in client.py threw an ConnectError on line 42.\n"
            "Message:\nrefused\n"
            "InnerException:\n"
            "Inner Exception Level 1: refused\n"
            "Inner Exception Level 2: errno 111\n"
            "StackCall:\n"
            "client.py:42 | send(url: str)\n"
            "app.py:10 | main()"
        )

    def test_unknown_placeholders(self):
        text = describe_fault(ValueError("lost"))
        assert text.startswith(f"{UNKNOWN_METHOD} in {UNKNOWN_FILENAME} threw an ValueError on line {UNKNOWN_LINE}.")
        assert "Inner Exception Level 1: lost" in text

    def test_describe_fault_includes_chain(self):
        text = describe_fault(_raise(_sync_profile, 5))
        assert "Message:\nsync failed" in text
        assert "Inner Exception Level 1: sync failed" in text
        assert "Inner Exception Level 2: 'profile 5 missing'" in text
        assert "test_diagnostics.py:" in text
        assert "| _sync_profile(user_id: int, *args: tuple, **kwargs: dict)" in text


class TestSafeStr:
    def test_plain(self):
        assert safe_str(ValueError("fine")) == "fine"

    def test_raising_str(self):
        class Garbled(Exception):
            def __str__(self):
                raise RuntimeError("cannot render")

        assert safe_str(Garbled()) == "<unprintable Garbled>"
        record = capture_fault(Garbled())
        assert record.message == "<unprintable Garbled>"
        assert record.causes == (CauseRecord("Garbled", "<unprintable Garbled>"),)
