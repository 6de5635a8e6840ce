"""
RT Normalizer - Canonical text for comparison

Every comparison in the structure and accuracy engines runs on the output of
normalize_text(). The function is pure, total and idempotent.
"""

import re
from typing import List, Optional, Tuple

from .taxonomies import (
    DIGIT_WORDS, RUN_ONLY_DIGIT_WORDS, TEEN_WORDS, TENS_WORDS,
    LOOSE_NUMBER_WORDS, SPOKEN_DIGITS, CALLSIGN_ALIASES
)

SEPARATORS = ',.-'

_STRIP_PUNCTUATION = re.compile(r'[^\w\s,.\-]')
_WHITESPACE = re.compile(r'\s+')
_TOKEN_EDGES = re.compile(r'^([,.\-]*)(.*?)([,.\-]*)$')
_LETTER_DIGIT = re.compile(r'(?<=[A-Z])(?=\d)')
_LOOSE_NUMBERS = re.compile(r'\b(' + '|'.join(LOOSE_NUMBER_WORDS) + r')\b')
_ALIASES = [
    (re.compile(r'\b' + r'\s+'.join(variant.split()) + r'\b'), canonical)
    for variant, canonical in CALLSIGN_ALIASES.items()
]


def normalize_text(text: Optional[str]) -> str:
    """
    Canonicalize text for comparison

    Steps: uppercase, strip punctuation except , . -, collapse whitespace,
    spelled numbers to digits, proper-noun aliases to their canonical form.
    """

    if not text:
        return ''

    result = text.upper()
    result = _STRIP_PUNCTUATION.sub(' ', result)
    result = _WHITESPACE.sub(' ', result).strip()
    result = normalize_numbers(result)

    for pattern, canonical in _ALIASES:
        result = pattern.sub(canonical, result)

    return _WHITESPACE.sub(' ', result).strip()


def normalize_numbers(text: str) -> str:
    """
    Replace spelled numbers with digits in uppercase, space-separated text

    Runs of spelled digits collapse into one number ("TWO SEVEN" -> "27"),
    tens take one following unit ("TWENTY SEVEN" -> "27"). A separator
    attached to a token ends the run.
    """

    tokens = text.split(' ') if text else []
    out = []
    i = 0

    while i < len(tokens):
        lead, core, trail = _split_edges(tokens[i])
        value = _number_value(core)
        if value is None:
            out.append(tokens[i])
            i += 1
            continue

        kind, digits = value
        j = i + 1

        if not trail and kind == 'tens' and j < len(tokens):
            next_lead, next_core, next_trail = _split_edges(tokens[j])
            unit = DIGIT_WORDS.get(next_core)
            if not next_lead and unit and unit != '0':
                digits = str(int(digits) + int(unit))
                trail = next_trail
                j += 1

        elif not trail and kind == 'digit':
            while j < len(tokens):
                next_lead, next_core, next_trail = _split_edges(tokens[j])
                digit = DIGIT_WORDS.get(next_core) or RUN_ONLY_DIGIT_WORDS.get(next_core)
                if next_lead or digit is None:
                    break
                digits += digit
                trail = next_trail
                j += 1
                if next_trail:
                    break

        out.append(lead + digits + trail)
        i = j

    return ' '.join(out)


def _split_edges(token: str) -> Tuple[str, str, str]:
    match = _TOKEN_EDGES.match(token)
    return match.group(1), match.group(2), match.group(3)


def _number_value(core: str) -> Optional[Tuple[str, str]]:
    """Classify a bare token: ('digit'|'teen'|'tens'|'compound', digits) or None"""

    if core in DIGIT_WORDS:
        return 'digit', DIGIT_WORDS[core]
    if core in TEEN_WORDS:
        return 'teen', TEEN_WORDS[core]
    if core in TENS_WORDS:
        return 'tens', str(TENS_WORDS[core])

    # Hyphenated: TWENTY-SEVEN, TWO-SEVEN
    if '-' in core:
        parts = core.split('-')
        if len(parts) == 2 and parts[0] in TENS_WORDS and DIGIT_WORDS.get(parts[1], '0') != '0':
            return 'compound', str(TENS_WORDS[parts[0]] + int(DIGIT_WORDS[parts[1]]))
        if all(p in DIGIT_WORDS for p in parts):
            return 'compound', ''.join(DIGIT_WORDS[p] for p in parts)

    return None


def apply_loose_numbers(text: str) -> str:
    """Map number homophones (TO, FOR, ATE...) to digits, for fuzzy matching only"""
    return _LOOSE_NUMBERS.sub(lambda m: LOOSE_NUMBER_WORDS[m.group(1)], text)


def tokenize_words(normalized: str) -> List[str]:
    """Split normalized text into words, dropping separators at token edges"""
    words = []
    for token in normalized.split():
        word = token.strip(SEPARATORS)
        if word:
            words.append(word)
    return words


def normalize_callsign(callsign: Optional[str]) -> str:
    """Canonical callsign for equality checks: 'Red Cross one' -> 'REDCROSS 1'"""
    text = ' '.join(tokenize_words(normalize_text(callsign)))
    text = _LETTER_DIGIT.sub(' ', text)
    return _WHITESPACE.sub(' ', text).strip()


def spoken_digits(value: str) -> str:
    """Digits back to RT spoken form: '27' -> 'TWO SEVEN'"""
    words = []
    for char in value:
        if char in SPOKEN_DIGITS:
            words.append(SPOKEN_DIGITS[char])
        elif char == '.':
            words.append('DECIMAL')
        elif not char.isspace():
            words.append(char)
    return ' '.join(words)
