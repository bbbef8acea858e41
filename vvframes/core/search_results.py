"""Search Result Parsing — newline-delimited JSON text → per-line records.

Invariants:
    - Pure function: no IO, no async
    - Blank (whitespace-only) lines are ignored, not reported
    - Every other line yields exactly one ParsedLine: a record or a diagnostic
    - Nesting too deep for the decoder is malformed, never raised
    - Only JSON objects count as records; other JSON values are malformed
    - Line numbers are 1-based positions in the original text

Design Decisions:
    - Records stay plain dicts: fields other than filename/timestamp are opaque
      and must pass through untouched
"""

import json
from dataclasses import dataclass

from vvframes.core.domain_types import Diagnostic, DiagnosticKind


@dataclass(frozen=True)
class ParsedLine:
    line_number: int
    record: dict | None = None
    diagnostic: Diagnostic | None = None


def _malformed(line_number: int, message: str) -> ParsedLine:
    return ParsedLine(
        line_number=line_number,
        diagnostic=Diagnostic(
            kind=DiagnosticKind.MALFORMED_RECORD,
            message=message,
            line_number=line_number,
        ),
    )


def parse_search_lines(api_text: str) -> list[ParsedLine]:
    """Parse each non-blank line of the search API response independently."""
    parsed: list[ParsedLine] = []
    for line_number, line in enumerate(api_text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            value = json.loads(line)
        except json.JSONDecodeError as e:
            parsed.append(_malformed(line_number, f"invalid JSON: {e.msg}"))
            continue
        except (ValueError, RecursionError) as e:
            parsed.append(_malformed(line_number, f"unreadable JSON: {type(e).__name__}"))
            continue
        if not isinstance(value, dict):
            parsed.append(_malformed(
                line_number, f"expected a JSON object, got {type(value).__name__}",
            ))
            continue
        parsed.append(ParsedLine(line_number=line_number, record=value))
    return parsed
