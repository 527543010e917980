"""Decoding of untrusted model output into review findings.

The model is asked for ``{"reviews": [{"lineNumber": n, "reviewComment": "..."}]}``
but may wrap it in code fences or surround it with prose. Everything that
cannot be recovered raises :class:`ReviewResponseDecodeError`.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

import structlog

from pr_reviewer.core.exceptions import ReviewResponseDecodeError

logger = structlog.get_logger()

REVIEWS_KEY = "reviews"
LINE_KEY = "lineNumber"
COMMENT_KEY = "reviewComment"

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class ReviewFinding:
    """A remark proposed by the model for one line of the new file."""

    line: int
    body: str


def extract_json_object(text: str) -> str:
    """Strip code fences and slice from the first ``{`` to the last ``}``."""
    cleaned = CODE_FENCE_PATTERN.sub("", text).strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ReviewResponseDecodeError(
            "No JSON object found in model response",
            details={"response": text[:500]},
        )
    return cleaned[start : end + 1]


def _parse_line_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if number.is_integer():
            return int(number)
    return None


def _parse_finding(item: Any) -> ReviewFinding | None:
    if not isinstance(item, dict):
        return None

    line = _parse_line_number(item.get(LINE_KEY))
    body = item.get(COMMENT_KEY)
    if line is None or line < 1 or not isinstance(body, str) or not body.strip():
        return None

    return ReviewFinding(line=line, body=body.strip())


def decode_review_response(text: str | None) -> list[ReviewFinding]:
    """Decode a raw model reply into an ordered list of findings."""
    if not text or not text.strip():
        raise ReviewResponseDecodeError("Empty model response")

    payload = extract_json_object(text)

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ReviewResponseDecodeError(
            f"Invalid JSON in model response: {e}",
            details={"response": text[:500]},
        ) from e

    if not isinstance(data, dict):
        raise ReviewResponseDecodeError("Model response is not a JSON object")

    reviews = data.get(REVIEWS_KEY)
    if not isinstance(reviews, list):
        raise ReviewResponseDecodeError(
            f"Model response has no '{REVIEWS_KEY}' array",
            details={"keys": sorted(data)},
        )

    findings = []
    for item in reviews:
        finding = _parse_finding(item)
        if finding is None:
            logger.warning("Skipping malformed review item", item=item)
            continue
        findings.append(finding)

    return findings
