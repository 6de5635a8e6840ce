"""
RT Evaluator Package v1.0

Scores radio-telephony (RT) transmissions against an expected message:
- Structure (30): callsign order, location, intent
- Accuracy (50): key elements, phrase overlap or WER, by difficulty
- Fluency (20): fillers, self-corrections, pauses
"""

from .evaluator import RTEvaluator, RTEvaluationResult, format_comparative_summary
from .models import (
    Difficulty, ScoringContext, ScoringParameters, EvaluationRequest,
    StructureResult, AccuracyResult, FluencyResult, CompositeResult
)
from .normalizer import normalize_text
from .structure import evaluate_structure
from .accuracy import evaluate_accuracy
from .fluency import evaluate_fluency, analyze_patterns
from .scoring import aggregate_scores, score_transmission
from .feedback import generate_feedback
from .scenarios import ScenarioContext

__version__ = '1.0.0'

__all__ = [
    'RTEvaluator',
    'RTEvaluationResult',
    'format_comparative_summary',
    'Difficulty',
    'ScoringContext',
    'ScoringParameters',
    'EvaluationRequest',
    'StructureResult',
    'AccuracyResult',
    'FluencyResult',
    'CompositeResult',
    'ScenarioContext',
    'normalize_text',
    'evaluate_structure',
    'evaluate_accuracy',
    'evaluate_fluency',
    'analyze_patterns',
    'aggregate_scores',
    'score_transmission',
    'generate_feedback',
]
