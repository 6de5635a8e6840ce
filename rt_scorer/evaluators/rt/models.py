"""
RT Models - Request and result types

Everything here is transient: built per evaluation call and thrown away.
Result objects serialize to the camelCase wire format via to_dict().
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .taxonomies import DIFFICULTY_DEFAULTS


class Difficulty(str, Enum):
    """Difficulty tier - selects the accuracy strategy and parameter defaults"""
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @classmethod
    def parse(cls, value: Any) -> 'Difficulty':
        """Unknown or missing tiers fall back to MEDIUM"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


@dataclass(frozen=True)
class ScoringContext:
    """What a correct transmission's structure looks like for this prompt"""
    expected_receiver: str
    expected_sender: str
    requires_location: bool = True


@dataclass(frozen=True)
class ScoringParameters:
    """Caller-supplied scoring knobs, immutable per call"""
    wer_threshold: float
    filler_penalty: float
    max_allowed_fillers: int
    pause_tolerance: float  # accepted, not consulted by the fluency formula

    @classmethod
    def for_difficulty(
        cls,
        difficulty: Difficulty,
        overrides: Optional[Dict[str, Any]] = None
    ) -> 'ScoringParameters':
        """Difficulty defaults, with any caller-supplied fields applied on top"""
        values = dict(DIFFICULTY_DEFAULTS[Difficulty.parse(difficulty).value])
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value
        return cls(
            wer_threshold=float(values['wer_threshold']),
            filler_penalty=float(values['filler_penalty']),
            max_allowed_fillers=int(values['max_allowed_fillers']),
            pause_tolerance=float(values['pause_tolerance']),
        )


# ==================== ENGINE RESULTS ====================

@dataclass
class StructureResult:
    """Structure engine output (0-30)"""
    score: int
    receiver_correct: bool
    sender_correct: bool
    location_present: bool
    intent_complete: bool
    detected_order: List[str]
    explanation: str
    location_detected: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'receiverCorrect': self.receiver_correct,
            'senderCorrect': self.sender_correct,
            'locationPresent': self.location_present,
            'intentComplete': self.intent_complete,
            'detectedOrder': list(self.detected_order),
            'explanation': self.explanation,
        }


@dataclass
class AccuracyResult:
    """Accuracy engine output (0-50)"""
    score: int
    matched_elements: List[str]
    missing_elements: List[str]
    explanation: str
    wer_score: Optional[int] = None  # percent, hard mode only
    semantic_score: Optional[float] = None  # 0..1, easy and medium
    phrase_score: Optional[float] = None  # 0..1, medium only

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'score': self.score,
            'matchedElements': list(self.matched_elements),
            'missingElements': list(self.missing_elements),
            'explanation': self.explanation,
        }
        if self.wer_score is not None:
            data['werScore'] = self.wer_score
        if self.semantic_score is not None:
            data['semanticScore'] = self.semantic_score
        return data


@dataclass
class FluencyResult:
    """Fluency engine output (0-20)"""
    score: int
    fillers_detected: List[str]
    filler_count: int
    corrections_detected: List[str]
    correction_count: int
    pause_indicators: int
    fluency_rating: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'fillersDetected': list(self.fillers_detected),
            'fillerCount': self.filler_count,
            'correctionsDetected': list(self.corrections_detected),
            'correctionCount': self.correction_count,
            'pauseIndicators': self.pause_indicators,
            'fluencyRating': self.fluency_rating,
            'explanation': self.explanation,
        }


@dataclass
class CompositeResult:
    """All three engine results plus their total (0-100)"""
    structure: StructureResult
    accuracy: AccuracyResult
    fluency: FluencyResult
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'structure': self.structure.to_dict(),
            'accuracy': self.accuracy.to_dict(),
            'fluency': self.fluency.to_dict(),
            'total': self.total,
        }


# ==================== REQUEST DECODING ====================

@dataclass(frozen=True)
class EvaluationRequest:
    """A decoded, validated scoring request"""
    transcript: str
    expected: str
    difficulty: Difficulty
    context: ScoringContext
    parameters: ScoringParameters

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'EvaluationRequest':
        """
        Decode a loose request payload (camelCase wire format)

        Missing parameters take the difficulty defaults. Receiver/sender may
        sit inside 'context' or at the top level.

        Raises:
            ValueError: if a required field is missing or has the wrong type
        """

        if not isinstance(payload, dict):
            raise ValueError("Request must be a JSON object")

        transcript = _require_text(payload, 'transcript')
        expected = _require_text(payload, 'expected')
        difficulty = Difficulty.parse(payload.get('difficulty'))

        context_data = payload.get('context') or {}
        if not isinstance(context_data, dict):
            raise ValueError("'context' must be an object")

        receiver = context_data.get('expectedReceiver', payload.get('expectedReceiver', ''))
        sender = context_data.get('expectedSender', payload.get('expectedSender', ''))
        if not isinstance(receiver, str) or not isinstance(sender, str):
            raise ValueError("'expectedReceiver' and 'expectedSender' must be strings")

        requires_location = context_data.get('requiresLocation', True)
        context = ScoringContext(
            expected_receiver=receiver,
            expected_sender=sender,
            requires_location=bool(requires_location),
        )

        params_data = payload.get('parameters') or {}
        if not isinstance(params_data, dict):
            raise ValueError("'parameters' must be an object")

        overrides = {
            'wer_threshold': _optional_number(params_data, 'werThreshold'),
            'filler_penalty': _optional_number(params_data, 'fillerPenalty', minimum=0),
            'max_allowed_fillers': _optional_number(params_data, 'maxAllowedFillers', minimum=0, integer=True),
            'pause_tolerance': _optional_number(params_data, 'pauseTolerance'),
        }

        return cls(
            transcript=transcript,
            expected=expected,
            difficulty=difficulty,
            context=context,
            parameters=ScoringParameters.for_difficulty(difficulty, overrides),
        )


def _require_text(payload: Dict[str, Any], key: str) -> str:
    if key not in payload or payload[key] is None:
        raise ValueError(f"Missing required field: '{key}'")
    value = payload[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def _optional_number(
    data: Dict[str, Any],
    key: str,
    minimum: Optional[float] = None,
    integer: bool = False
):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    if minimum is not None and value < minimum:
        raise ValueError(f"'{key}' must be >= {minimum}")
    if integer and isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise ValueError(f"'{key}' must be a whole number")
    return value


# ==================== NUMERIC HELPERS ====================

def round_half_up(value: float) -> int:
    """Round .5 upward (Python's round() would go to even)"""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, ceiling: int) -> int:
    """Clamp into [0, ceiling]; NaN and infinities collapse to 0 / ceiling"""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return ceiling if value > 0 else 0
    return max(0, min(ceiling, round_half_up(value)))
