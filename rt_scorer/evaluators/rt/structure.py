"""
RT Structure - Callsign order, location and intent

Checks the [Receiver][Sender][Location][Intent] transmission format:
- Receiver callsign first, sender callsign second
- Location given when the prompt requires one
- Some actual message left once the callsigns are removed
"""

import re
from typing import List, Optional

from .models import ScoringContext, StructureResult, clamp_score
from .normalizer import normalize_text, normalize_callsign, SEPARATORS
from .taxonomies import (
    CALLSIGN_PATTERNS, LOCATION_INDICATORS, STRUCTURE_POINTS, MIN_INTENT_TOKENS
)

STRUCTURE_CEILING = sum(STRUCTURE_POINTS.values())

SUCCESS_MESSAGE = 'Structure is correct: [Receiver][Sender][Location][Intent] format followed.'

_TOKEN_SPLIT = re.compile(r'[\s,]+')
_NUMERIC = re.compile(r'^\d+$')


def evaluate_structure(transcript: str, context: ScoringContext) -> StructureResult:
    """Score transmission structure (0-30)"""

    normalized = normalize_text(transcript)

    detected = extract_callsigns(normalized)
    location = detect_location(normalized)

    receiver_correct = len(detected) >= 1 and _callsigns_match(detected[0], context.expected_receiver)
    sender_correct = len(detected) >= 2 and _callsigns_match(detected[1], context.expected_sender)
    location_present = location is not None if context.requires_location else True
    intent_complete = check_intent(normalized, detected)

    score = 0
    if receiver_correct:
        score += STRUCTURE_POINTS['receiver']
    if sender_correct:
        score += STRUCTURE_POINTS['sender']
    if location_present:
        score += STRUCTURE_POINTS['location']
    if intent_complete:
        score += STRUCTURE_POINTS['intent']

    explanation = _build_explanation(
        receiver_correct, sender_correct, location_present, intent_complete,
        context, detected
    )

    return StructureResult(
        score=clamp_score(score, STRUCTURE_CEILING),
        receiver_correct=receiver_correct,
        sender_correct=sender_correct,
        location_present=location_present,
        intent_complete=intent_complete,
        detected_order=detected,
        explanation=explanation,
        location_detected=location,
    )


def extract_callsigns(normalized: str) -> List[str]:
    """
    Callsigns in order of appearance

    A callsign token followed by a bare number becomes one unit
    ("REDCROSS 1"); an attached number is split off ("REDCROSS1").
    """

    tokens = [t.strip(SEPARATORS) for t in _TOKEN_SPLIT.split(normalized)]
    tokens = [t for t in tokens if t]

    callsigns = []
    i = 0
    while i < len(tokens):
        for pattern in CALLSIGN_PATTERNS:
            match = pattern.match(tokens[i])
            if not match:
                continue
            name, number = match.group(1), match.group(2)
            if not number and i + 1 < len(tokens) and _NUMERIC.match(tokens[i + 1]):
                number = tokens[i + 1]
                i += 1
            callsigns.append(f"{name} {number}" if number else name)
            break
        i += 1

    return callsigns


def detect_location(normalized: str) -> Optional[str]:
    """First location indicator found, or None"""
    for pattern in LOCATION_INDICATORS:
        match = pattern.search(normalized)
        if match:
            return match.group(0)
    return None


def check_intent(normalized: str, callsigns: List[str]) -> bool:
    """At least two words longer than two letters remain once callsigns are removed"""

    remaining = normalized
    for callsign in callsigns:
        parts = [re.escape(p) for p in callsign.split()]
        pattern = r'(?<!\w)' + r'\s*'.join(parts) + r'(?!\w)'
        remaining = re.sub(pattern, ' ', remaining, flags=re.I)

    words = [w.strip(SEPARATORS) for w in remaining.split()]
    return sum(1 for w in words if len(w) > 2) >= MIN_INTENT_TOKENS


def _callsigns_match(actual: str, expected: str) -> bool:
    expected_norm = normalize_callsign(expected)
    return bool(expected_norm) and normalize_callsign(actual) == expected_norm


def _build_explanation(
    receiver_correct: bool,
    sender_correct: bool,
    location_present: bool,
    intent_complete: bool,
    context: ScoringContext,
    detected: List[str]
) -> str:
    """Name each failed check with expected vs detected values"""

    issues = []

    if not receiver_correct:
        found = detected[0] if detected else 'none'
        issues.append(f'Receiver callsign "{context.expected_receiver}" should be FIRST. Detected: {found}')

    if not sender_correct:
        found = detected[1] if len(detected) > 1 else 'none'
        issues.append(f'Sender callsign "{context.expected_sender}" should be SECOND. Detected: {found}')

    if not location_present:
        issues.append('Location information missing (required for this transmission)')

    if not intent_complete:
        issues.append('Message intent/purpose is incomplete or unclear')

    if not issues:
        return SUCCESS_MESSAGE

    return f"Structure issues: {'; '.join(issues)}"
