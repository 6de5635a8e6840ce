"""
RT Scoring - Composite score assembly

Structure (30) + Accuracy (50) + Fluency (20) = Total (100)
"""

from .accuracy import evaluate_accuracy
from .fluency import evaluate_fluency
from .models import (
    AccuracyResult, CompositeResult, EvaluationRequest, FluencyResult, StructureResult
)
from .structure import evaluate_structure


def aggregate_scores(
    structure: StructureResult,
    accuracy: AccuracyResult,
    fluency: FluencyResult
) -> CompositeResult:
    """Sum the three sub-scores and package the engine results"""
    return CompositeResult(
        structure=structure,
        accuracy=accuracy,
        fluency=fluency,
        total=structure.score + accuracy.score + fluency.score,
    )


def score_transmission(request: EvaluationRequest) -> CompositeResult:
    """Run all three engines over one request"""

    structure = evaluate_structure(request.transcript, request.context)
    accuracy = evaluate_accuracy(
        request.transcript,
        request.expected,
        request.difficulty,
        wer_threshold=request.parameters.wer_threshold,
    )
    fluency = evaluate_fluency(request.transcript, request.parameters)

    return aggregate_scores(structure, accuracy, fluency)
