"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - FrameKey and Diagnostic are immutable
    - DiagnosticKind has exactly the three skip reasons and serializes to string
"""

import dataclasses

import pytest

from vvframes.core.domain_types import (
    Diagnostic, DiagnosticKind, FolderId, FrameKey, FrameSeconds, GroupIndex,
)


def test_identity_types_wrap_int():
    assert FolderId(70) == 70
    assert FrameSeconds(2057) == 2057
    assert GroupIndex(6) == 6


def test_frame_key_is_frozen():
    key = FrameKey(folder_id=FolderId(70), frame_seconds=FrameSeconds(2057))
    with pytest.raises(dataclasses.FrozenInstanceError):
        key.folder_id = 71


def test_diagnostic_kind_has_three_reasons():
    assert set(DiagnosticKind) == {
        DiagnosticKind.MALFORMED_RECORD,
        DiagnosticKind.LOOKUP_MISS,
        DiagnosticKind.EXTRACTION_FAILURE,
    }
    assert DiagnosticKind.LOOKUP_MISS.value == "lookup_miss"


def test_diagnostic_defaults():
    d = Diagnostic(kind=DiagnosticKind.MALFORMED_RECORD, message="bad")
    assert d.line_number is None
    assert d.folder_id is None
