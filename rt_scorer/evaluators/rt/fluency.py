"""
RT Fluency - Fillers, self-corrections and pauses

Starts from 20 and deducts:
- fillers beyond the allowance, at the filler penalty each
- 1 point per self-correction
- 0.5 per pause indicator
"""

from collections import Counter
from typing import Dict, List

from .models import FluencyResult, ScoringParameters, clamp_score, round_half_up
from .taxonomies import (
    FILLER_PATTERNS, CORRECTION_MARKERS, REPEATED_WORD, CUT_OFF_WORD,
    RESTART_AFTER_PAUSE, PAUSE_PATTERNS,
    FLUENCY_CEILING, CORRECTION_PENALTY, PAUSE_PENALTY, FLUENCY_RATINGS
)

FILLER_PREVIEW = 5


def evaluate_fluency(transcript: str, parameters: ScoringParameters) -> FluencyResult:
    """Score fluency (0-20)"""

    transcript = transcript or ''
    lowered = transcript.lower()

    fillers = detect_fillers(lowered)
    corrections = detect_corrections(lowered)
    pauses = count_pauses(transcript)

    score = calculate_fluency_score(len(fillers), len(corrections), pauses, parameters)
    rating = fluency_rating(score)

    return FluencyResult(
        score=score,
        fillers_detected=fillers,
        filler_count=len(fillers),
        corrections_detected=corrections,
        correction_count=len(corrections),
        pause_indicators=pauses,
        fluency_rating=rating,
        explanation=_build_explanation(fillers, corrections, pauses, score, rating),
    )


def detect_fillers(lowered: str) -> List[str]:
    """Every filler occurrence, grouped by pattern"""
    fillers = []
    for pattern in FILLER_PATTERNS:
        fillers.extend(m.group(0).strip().lower() for m in pattern.finditer(lowered))
    return fillers


def detect_corrections(lowered: str) -> List[str]:
    """Distinct self-correction fragments, in detection order"""

    found = [m.group(0).strip() for m in CORRECTION_MARKERS.finditer(lowered)]
    found.extend(m.group(0).strip() for m in REPEATED_WORD.finditer(lowered))
    found.extend(m.group(0).strip() for m in CUT_OFF_WORD.finditer(lowered))
    found.extend(m.group(0).strip() for m in RESTART_AFTER_PAUSE.finditer(lowered))

    # dedupe, keep first occurrence
    return list(dict.fromkeys(found))


def count_pauses(text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in PAUSE_PATTERNS)


def calculate_fluency_score(
    filler_count: int,
    correction_count: int,
    pause_count: int,
    parameters: ScoringParameters
) -> int:
    excess_fillers = max(0, filler_count - parameters.max_allowed_fillers)

    score = float(FLUENCY_CEILING)
    if excess_fillers:
        score -= excess_fillers * parameters.filler_penalty
    score -= correction_count * CORRECTION_PENALTY
    score -= pause_count * PAUSE_PENALTY

    return clamp_score(score, FLUENCY_CEILING)


def fluency_rating(score: int) -> str:
    for threshold, rating in FLUENCY_RATINGS:
        if score >= threshold:
            return rating
    return FLUENCY_RATINGS[-1][1]


def _build_explanation(
    fillers: List[str],
    corrections: List[str],
    pauses: int,
    score: int,
    rating: str
) -> str:
    parts = [f"Fluency rating: {rating} ({score}/{FLUENCY_CEILING} points)."]

    if fillers:
        unique = list(dict.fromkeys(fillers))
        more = '...' if len(unique) > FILLER_PREVIEW else ''
        parts.append(
            f"Filler words detected ({len(fillers)}): {', '.join(unique[:FILLER_PREVIEW])}{more}"
        )

    if corrections:
        parts.append(f"Self-corrections detected: {len(corrections)}")

    if pauses > 0:
        parts.append(f"Hesitations/pauses: {pauses}")

    if not fillers and not corrections and pauses == 0:
        parts.append('Clear and fluent delivery.')

    return ' '.join(parts)


def analyze_patterns(transcripts: List[str]) -> Dict:
    """
    Filler habits across several transcripts

    Returns:
        Dict with common_fillers (top 5 by frequency),
        average_filler_rate (fillers per 100 words, one decimal)
        and improvement_areas
    """

    all_fillers = []
    total_words = 0

    for transcript in transcripts:
        all_fillers.extend(detect_fillers((transcript or '').lower()))
        total_words += len((transcript or '').split())

    ranked = [filler for filler, _ in Counter(all_fillers).most_common()]

    rate = (len(all_fillers) / total_words) * 100 if total_words else 0.0

    improvement_areas = []
    if rate > 5:
        improvement_areas.append('Reduce filler word usage')
    if 'um' in ranked or 'uh' in ranked:
        improvement_areas.append('Practice speaking without verbal pauses')
    if 'like' in ranked or 'you know' in ranked:
        improvement_areas.append('Eliminate conversational fillers')

    return {
        'common_fillers': ranked[:5],
        'average_filler_rate': round_half_up(rate * 10) / 10,
        'improvement_areas': improvement_areas,
    }
