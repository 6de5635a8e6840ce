"""
RT Taxonomies - Static classification data

Contains:
- Number equivalences (digits, spelled words, RT pronunciations)
- Proper noun aliases
- Callsign patterns and location indicators (structure)
- Key element patterns (accuracy)
- Filler, correction and pause patterns (fluency)
- Difficulty defaults, rating bands and model pricing
"""

import re

# ==================== NUMBER EQUIVALENCES ====================

# Spelled digits, including ICAO pronunciations
DIGIT_WORDS = {
    'ZERO': '0',
    'ONE': '1', 'WUN': '1',
    'TWO': '2',
    'THREE': '3', 'TREE': '3',
    'FOUR': '4', 'FOWER': '4',
    'FIVE': '5', 'FIFE': '5',
    'SIX': '6',
    'SEVEN': '7',
    'EIGHT': '8',
    'NINE': '9', 'NINER': '9',
}

# Only counts as zero inside a run of spelled digits ("ONE OH NINE")
RUN_ONLY_DIGIT_WORDS = {'OH': '0'}

TEEN_WORDS = {
    'TEN': '10', 'ELEVEN': '11', 'TWELVE': '12', 'THIRTEEN': '13',
    'FOURTEEN': '14', 'FIFTEEN': '15', 'SIXTEEN': '16',
    'SEVENTEEN': '17', 'EIGHTEEN': '18', 'NINETEEN': '19',
}

TENS_WORDS = {
    'TWENTY': 20, 'THIRTY': 30, 'FORTY': 40, 'FIFTY': 50,
    'SIXTY': 60, 'SEVENTY': 70, 'EIGHTY': 80, 'NINETY': 90,
}

# Homophones only trusted for fuzzy matching, never for canonical text
LOOSE_NUMBER_WORDS = {
    'TO': '2', 'TOO': '2',
    'FOR': '4', 'FORE': '4',
    'ATE': '8',
    'WON': '1',
}

# Canonical spoken form per digit (digits -> words direction)
SPOKEN_DIGITS = {
    '0': 'ZERO', '1': 'ONE', '2': 'TWO', '3': 'THREE', '4': 'FOUR',
    '5': 'FIVE', '6': 'SIX', '7': 'SEVEN', '8': 'EIGHT', '9': 'NINER',
}

# ==================== PROPER NOUN ALIASES ====================

CALLSIGN_ALIASES = {
    'SHEPHERD': 'SHEPHARD',
    'RED CROSS': 'REDCROSS',
    'BLUE CROSS': 'BLUECROSS',
}

# ==================== STRUCTURE ====================

# Ordered: first match wins. Group 1 is the name, group 2 an attached number.
CALLSIGN_PATTERNS = [
    re.compile(r'^(SHEPHARD)(\d*)$'),
    re.compile(r'^(REDCROSS)(\d*)$'),
    re.compile(r'^(BLUECROSS)(\d*)$'),
    re.compile(r'^(LOGIC)(\d*)$'),
    re.compile(r'^(STALKER)(\d*)$'),
    re.compile(r'^(SPARTAN)(\d*)$'),
    re.compile(r'^(TENDER)(\d*)$'),
    re.compile(r'^(GUARDIAN)(\d*)$'),
    re.compile(r'^(PHOENIX)(\d*)$'),
    re.compile(r'^(EAGLE)(\d*)$'),
    re.compile(r'^(FALCON)(\d*)$'),
    re.compile(r'^(HAWK)(\d*)$'),
    re.compile(r'^(TOWER)()$'),
    re.compile(r'^(GROUND)()$'),
    re.compile(r'^(APPROACH)()$'),
    re.compile(r'^(DEPARTURE)()$'),
    re.compile(r'^(CENTER)()$'),
    re.compile(r'^(RADAR)()$'),
    re.compile(r'^(RESCUE)(\d*)$'),
    re.compile(r'^(MEDIC)(\d*)$'),
    re.compile(r'^(FIRE)(\d*)$'),
    re.compile(r'^(CRASH)(\d*)$'),
]

LOCATION_INDICATORS = [
    re.compile(p, re.I) for p in [
        r'\bat\s+\w+',
        r'\bnear\s+\w+',
        r'\bfrom\s+\w+',
        r'\bto\s+\w+',
        r'\bvia\s+\w+',
        r'runway\s*\d+',
        r'taxiway\s*\w+',
        r'apron',
        r'ramp',
        r'gate\s*\d*',
        r'threshold',
        r'holding\s*point',
        r'intersection',
        r'fuel\s*area',
        r'medical\s*bay',
        r'hangar',
        r'tower',
        r'north|south|east|west',
    ]
]

STRUCTURE_POINTS = {
    'receiver': 10,
    'sender': 10,
    'location': 5,
    'intent': 5,
}

MIN_INTENT_TOKENS = 2

# ==================== ACCURACY ====================

KEY_ELEMENT_PATTERNS = {
    'callsign': re.compile(
        r'\b(?:shephard|redcross|bluecross|logic|stalker|spartan|guardian|tender)(?:\s*\d+)?\b', re.I),
    'action': re.compile(
        r'\b(?:request|cleared|proceed|hold|contact|standby|affirm|negative|roger|wilco)\b', re.I),
    'location': re.compile(
        r'\b(?:runway|taxiway|apron|gate|threshold|holding|intersection|fuel|medical|tower)(?:\s+\w+)?', re.I),
    'number': re.compile(r'\b(?:runway\s*)?\d{1,2}[LRC]?\b', re.I),
    'urgency': re.compile(r'\b(?:mayday|pan\s*pan|emergency|urgent|priority)\b', re.I),
    'clearance': re.compile(r'\b(?:clearance|cleared|approved|authorized)\b', re.I),
}

ACCURACY_CEILING = 50
SEMANTIC_WEIGHT = 0.6
PHRASE_WEIGHT = 0.4
PHRASE_SIZES = (2, 3)
DEFAULT_WER_THRESHOLD = 20
MISSING_PREVIEW = 3

# ==================== FLUENCY ====================

FILLER_PATTERNS = [
    re.compile(p, re.I) for p in [
        r'\bum+\b',
        r'\buh+\b',
        r'\ber+\b',
        r'\bah+\b',
        r'\blike\b(?!\s+(?:to|it|this|that|a|the|we|i|you|they|he|she)\b)',
        r'\byou know\b',
        r'\bbasically\b',
        r'\bactually\b',
        r'\bso\b(?=\s*,|\s*\.{2,}|\s+um|\s+uh)',
        r'\bwell\b(?=\s*,|\s*\.{2,}|\s+um|\s+uh)',
        r'\bi mean\b',
        r'\b(?:kind of|kinda)\b',
        r'\b(?:sort of|sorta)\b',
        r'\bright\b(?=\s*,|\s*\?)',
        r'\b(?:okay|ok)\b(?=\s+so|\s+um|\s+uh)',
    ]
]

CORRECTION_MARKERS = re.compile(r'\b(?:i mean|no wait|sorry|correction|rather)\b', re.I)
REPEATED_WORD = re.compile(r'\b(\w{2,})\s+\1\b', re.I)
CUT_OFF_WORD = re.compile(r'\b\w{2,}-\s')
RESTART_AFTER_PAUSE = re.compile(r'\.{2,}\s*\b(?:i|we|the|a|this|that)\b', re.I)

PAUSE_PATTERNS = [
    re.compile(r'\.{3,}'),
    re.compile(r'\[pause\]', re.I),
    re.compile(r'\[long pause\]', re.I),
    re.compile(r'\(pause\)', re.I),
    re.compile(r'-{2,}'),
    re.compile(r'\s{3,}'),
]

FLUENCY_CEILING = 20
CORRECTION_PENALTY = 1.0
PAUSE_PENALTY = 0.5

# Checked top to bottom
FLUENCY_RATINGS = [
    (18, 'excellent'),
    (14, 'good'),
    (8, 'fair'),
    (0, 'poor'),
]

# ==================== DIFFICULTY DEFAULTS ====================

DIFFICULTY_DEFAULTS = {
    'easy': {
        'wer_threshold': 50.0,
        'filler_penalty': 1.0,
        'max_allowed_fillers': 3,
        'pause_tolerance': 3.0,
    },
    'medium': {
        'wer_threshold': 30.0,
        'filler_penalty': 2.0,
        'max_allowed_fillers': 2,
        'pause_tolerance': 2.0,
    },
    'hard': {
        'wer_threshold': 15.0,
        'filler_penalty': 3.0,
        'max_allowed_fillers': 1,
        'pause_tolerance': 1.0,
    },
}

# ==================== LLM FEEDBACK PRICING ====================

DEFAULT_FEEDBACK_MODEL = 'claude-sonnet-4-20250514'

# USD per 1M tokens
MODEL_PRICING = {
    'claude-sonnet-4-20250514': {'input': 3.00, 'output': 15.00},
    'claude-3-5-haiku-20241022': {'input': 0.80, 'output': 4.00},
}
