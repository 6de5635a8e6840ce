"""
RT Feedback Generation

Generates rule-based feedback for each score component, with a
next step the trainee can act on.
"""

import re
from typing import Dict, List

from .models import (
    AccuracyResult, CompositeResult, Difficulty, FluencyResult, ScoringContext,
    StructureResult
)
from .normalizer import spoken_digits

_HAS_DIGIT = re.compile(r'\d')


def generate_feedback(
    result: CompositeResult,
    context: ScoringContext,
    difficulty: Difficulty
) -> Dict[str, str]:
    """
    Generate feedback for all three components

    Returns:
        Dict with structure, structure_next, accuracy, accuracy_next,
        fluency, fluency_next
    """

    feedback = {}
    feedback.update(_generate_structure_feedback(result.structure, context))
    feedback.update(_generate_accuracy_feedback(result.accuracy, difficulty))
    feedback.update(_generate_fluency_feedback(result.fluency))
    return feedback


def _generate_structure_feedback(structure: StructureResult, context: ScoringContext) -> Dict[str, str]:
    """Structure feedback"""

    detected = ', '.join(structure.detected_order) if structure.detected_order else 'no callsigns'
    text = f"Structure {structure.score}/30. Callsigns heard in order: {detected}."
    if structure.location_detected:
        text += f" Position heard: {structure.location_detected}."
    else:
        text += " No position heard."

    next_steps = []
    if not structure.receiver_correct or not structure.sender_correct:
        next_steps.append(
            f"Open with the station you are calling, then yourself: "
            f"\"{context.expected_receiver}, {context.expected_sender}\""
        )
    if not structure.location_present:
        next_steps.append("State your position before the request (e.g. 'at Medical Bay')")
    if not structure.intent_complete:
        next_steps.append("Finish the transmission with a clear request or report")

    if next_steps:
        structure_next = ". ".join(next_steps) + "."
    else:
        structure_next = "Keep using the [Receiver][Sender][Location][Intent] order."

    return {'structure': text, 'structure_next': structure_next}


def _generate_accuracy_feedback(accuracy: AccuracyResult, difficulty: Difficulty) -> Dict[str, str]:
    """Accuracy feedback"""

    text = f"Accuracy {accuracy.score}/50 ({difficulty.value} mode). {accuracy.explanation}"

    if not accuracy.missing_elements:
        return {'accuracy': text, 'accuracy_next': "Content matches the expected message."}

    next_steps = [f"Include: {', '.join(accuracy.missing_elements[:5])}"]

    numbers = _number_hints(accuracy.missing_elements)
    if numbers:
        next_steps.append(f"Read numbers digit by digit: {'; '.join(numbers)}")

    return {'accuracy': text, 'accuracy_next': ". ".join(next_steps) + "."}


def _number_hints(elements: List[str]) -> List[str]:
    hints = []
    for element in elements:
        if _HAS_DIGIT.search(element):
            spoken = ' '.join(
                spoken_digits(token) if _HAS_DIGIT.search(token) else token
                for token in element.split()
            )
            hint = f"{element} as \"{spoken}\""
            if hint not in hints:
                hints.append(hint)
    return hints[:3]


def _generate_fluency_feedback(fluency: FluencyResult) -> Dict[str, str]:
    """Fluency feedback"""

    text = f"Fluency {fluency.score}/20. {fluency.explanation}"

    next_steps = []
    if fluency.filler_count:
        unique = ', '.join(dict.fromkeys(fluency.fillers_detected))
        next_steps.append(f"Pause silently instead of saying: {unique}")
    if fluency.correction_count:
        next_steps.append("Plan the transmission before keying the mic to avoid corrections")
    if fluency.pause_indicators:
        next_steps.append("Deliver the message in one continuous transmission")

    fluency_next = ". ".join(next_steps) + "." if next_steps else "Delivery is clear, keep it up."

    return {'fluency': text, 'fluency_next': fluency_next}
