"""
RT Accuracy - Content accuracy by difficulty tier

Three strategies, picked by difficulty:
- easy:   key elements of the expected message must be present
- medium: key elements (60%) + 2/3-word phrase overlap (40%)
- hard:   Word Error Rate against the expected message
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from .edit_distance import align_sequences, word_error_rate
from .models import AccuracyResult, Difficulty, clamp_score, round_half_up
from .normalizer import normalize_text, apply_loose_numbers, tokenize_words
from .taxonomies import (
    KEY_ELEMENT_PATTERNS, ACCURACY_CEILING, SEMANTIC_WEIGHT, PHRASE_WEIGHT,
    PHRASE_SIZES, DEFAULT_WER_THRESHOLD, MISSING_PREVIEW
)


def evaluate_accuracy(
    transcript: str,
    expected: str,
    difficulty,
    wer_threshold: Optional[float] = None
) -> AccuracyResult:
    """
    Score content accuracy (0-50)

    Args:
        transcript: What the user said
        expected: The gold message
        difficulty: Difficulty or its string value; unknown tiers score as medium
        wer_threshold: WER percent reported as pass/fail in hard mode (default 20)
    """

    tier = Difficulty.parse(difficulty)
    strategy = STRATEGIES[tier]

    threshold = DEFAULT_WER_THRESHOLD if wer_threshold is None else wer_threshold
    return strategy(normalize_text(transcript), normalize_text(expected), threshold)


# ==================== EASY: KEY ELEMENTS ====================

def evaluate_semantic(transcript: str, expected: str, wer_threshold: float = DEFAULT_WER_THRESHOLD) -> AccuracyResult:
    """Fraction of the expected message's key elements found in the transcript"""

    matched, missing, ratio = match_key_elements(transcript, expected)

    return AccuracyResult(
        score=clamp_score(ratio * ACCURACY_CEILING, ACCURACY_CEILING),
        matched_elements=matched,
        missing_elements=missing,
        semantic_score=ratio,
        explanation=_semantic_explanation(missing, ratio),
    )


def extract_key_elements(text: str) -> List[str]:
    """Deduplicated key elements, in pattern-class order then text order"""

    elements = []
    seen = set()
    for pattern in KEY_ELEMENT_PATTERNS.values():
        for match in pattern.finditer(text):
            element = ' '.join(match.group(0).upper().split())
            if element and element not in seen:
                seen.add(element)
                elements.append(element)
    return elements


def element_present(element: str, text: str) -> bool:
    """Whole-word containment, retried with number homophones normalized"""

    if _contains(text, element):
        return True
    return _contains(apply_loose_numbers(text), apply_loose_numbers(element))


def match_key_elements(transcript: str, expected: str) -> Tuple[List[str], List[str], float]:
    """Returns: (matched, missing, ratio)"""

    elements = extract_key_elements(expected)
    matched = [e for e in elements if element_present(e, transcript)]
    missing = [e for e in elements if e not in matched]

    required = len(elements) or 1
    return matched, missing, len(matched) / required


def _contains(text: str, fragment: str) -> bool:
    if not fragment:
        return False
    pattern = r'(?<!\w)' + r'\s+'.join(re.escape(p) for p in fragment.split()) + r'(?!\w)'
    return re.search(pattern, text) is not None


def _semantic_explanation(missing: List[str], ratio: float) -> str:
    percentage = round_half_up(ratio * 100)

    if not missing:
        return f"All key information present ({percentage}% match)."

    preview = ', '.join(missing[:MISSING_PREVIEW])
    extra = len(missing) - MISSING_PREVIEW
    suffix = f" (+{extra} more)" if extra > 0 else ""
    return f"{percentage}% semantic match. Missing: {preview}{suffix}"


# ==================== MEDIUM: BALANCED ====================

def evaluate_balanced(transcript: str, expected: str, wer_threshold: float = DEFAULT_WER_THRESHOLD) -> AccuracyResult:
    """Key element ratio (60%) blended with phrase overlap (40%)"""

    matched, missing, semantic = match_key_elements(transcript, expected)
    phrase = phrase_overlap(transcript, expected)

    combined = (semantic * SEMANTIC_WEIGHT + phrase * PHRASE_WEIGHT) * ACCURACY_CEILING

    return AccuracyResult(
        score=clamp_score(combined, ACCURACY_CEILING),
        matched_elements=matched,
        missing_elements=missing,
        semantic_score=semantic,
        phrase_score=phrase,
        explanation=(
            f"Balanced scoring: {round_half_up(semantic * 100)}% semantic match, "
            f"{round_half_up(phrase * 100)}% phrase match."
        ),
    )


def extract_phrases(text: str) -> List[str]:
    """Sliding 2- and 3-word windows"""
    words = tokenize_words(text)
    phrases = []
    for i in range(len(words)):
        for size in PHRASE_SIZES:
            if i + size <= len(words):
                phrases.append(' '.join(words[i:i + size]))
    return phrases


def phrase_overlap(transcript: str, expected: str) -> float:
    """Fraction of expected phrases also found in the transcript (1.0 if none expected)"""

    expected_phrases = [apply_loose_numbers(p) for p in extract_phrases(expected)]
    if not expected_phrases:
        return 1.0

    transcript_phrases = {apply_loose_numbers(p) for p in extract_phrases(transcript)}
    hits = sum(1 for p in expected_phrases if p in transcript_phrases)
    return hits / len(expected_phrases)


# ==================== HARD: WORD ERROR RATE ====================

def evaluate_exact(transcript: str, expected: str, wer_threshold: float = DEFAULT_WER_THRESHOLD) -> AccuracyResult:
    """
    WER-based score: 50 * (1 - WER), floored at 0

    The threshold only annotates the explanation.
    """

    hypothesis = tokenize_words(transcript)
    reference = tokenize_words(expected)

    wer = word_error_rate(hypothesis, reference)
    wer_percentage = round_half_up(wer * 100)

    matched, missing = [], []
    for op, ref_index, _ in align_sequences(reference, hypothesis):
        if op == 'match':
            matched.append(reference[ref_index])
        elif op in ('sub', 'del'):
            missing.append(reference[ref_index])

    if wer_percentage <= wer_threshold:
        verdict = 'Within acceptable threshold.'
    else:
        verdict = f"Exceeds {_format_threshold(wer_threshold)}% threshold."

    return AccuracyResult(
        score=clamp_score(ACCURACY_CEILING * (1 - wer), ACCURACY_CEILING),
        matched_elements=matched,
        missing_elements=missing,
        wer_score=wer_percentage,
        explanation=f"Word Error Rate: {wer_percentage}%. {verdict}",
    )


def _format_threshold(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


STRATEGIES: Dict[Difficulty, Callable[..., AccuracyResult]] = {
    Difficulty.EASY: evaluate_semantic,
    Difficulty.MEDIUM: evaluate_balanced,
    Difficulty.HARD: evaluate_exact,
}
