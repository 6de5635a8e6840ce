"""
API-Based RT Feedback

Uses Anthropic Claude API to write narrative coaching feedback on top of the
rule-based scores. The scores themselves never come from the model.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from anthropic import Anthropic

from .models import CompositeResult, Difficulty
from .taxonomies import DEFAULT_FEEDBACK_MODEL, MODEL_PRICING

DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_MAX_RETRIES = 2


FEEDBACK_PROMPT = """You are an expert Radio Telephony (RT) communication evaluator for airfield operations.

EXPECTED MESSAGE:
"{expected}"

USER TRANSCRIPT:
"{transcript}"

DIFFICULTY LEVEL: {difficulty}

PRELIMINARY SCORES (from automated analysis):
- Structure: {structure_score}/30 - {structure_explanation}
- Accuracy: {accuracy_score}/50 - {accuracy_explanation}
- Fluency: {fluency_score}/20 - {fluency_explanation}

Please provide:
1. A brief (2-3 sentence) overall assessment
2. One specific improvement suggestion for the user
3. Acknowledgment of what they did well (if anything)

Keep your response concise (under 100 words) and constructive."""


@dataclass
class LLMFeedback:
    """Narrative feedback plus the token usage it cost"""
    feedback: str
    model: str
    input_tokens: int
    output_tokens: int
    cost: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'feedback': self.feedback,
            'model': self.model,
            'inputTokens': self.input_tokens,
            'outputTokens': self.output_tokens,
            'cost': self.cost,
        }


def build_feedback_prompt(
    transcript: str,
    expected: str,
    difficulty: Difficulty,
    result: CompositeResult
) -> str:
    return FEEDBACK_PROMPT.format(
        expected=expected,
        transcript=transcript,
        difficulty=Difficulty.parse(difficulty).value.upper(),
        structure_score=result.structure.score,
        structure_explanation=result.structure.explanation,
        accuracy_score=result.accuracy.score,
        accuracy_explanation=result.accuracy.explanation,
        fluency_score=result.fluency.score,
        fluency_explanation=result.fluency.explanation,
    )


def generate_llm_feedback(
    transcript: str,
    expected: str,
    difficulty: Difficulty,
    result: CompositeResult,
    api_key: Optional[str] = None,
    model: str = DEFAULT_FEEDBACK_MODEL,
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES
) -> LLMFeedback:
    """
    Get narrative feedback from Claude.

    Args:
        transcript: What the user said
        expected: The gold message
        difficulty: Difficulty tier shown to the model
        result: Rule-based scores passed in as context
        api_key: Anthropic API key (or use ANTHROPIC_API_KEY env var)
        model: Claude model name; must have an entry in MODEL_PRICING

    Returns:
        LLMFeedback with text, token counts and cost in USD

    Raises:
        ValueError: if no API key is available, the model has no pricing
            or the response carries no text
    """

    key = api_key or os.environ.get('ANTHROPIC_API_KEY')
    if not key:
        raise ValueError("ANTHROPIC_API_KEY not set")

    # Fail before spending tokens
    if model not in MODEL_PRICING:
        raise ValueError(f"No pricing configured for model: {model}")

    client = Anthropic(api_key=key, timeout=timeout, max_retries=max_retries)

    prompt = build_feedback_prompt(transcript, expected, difficulty, result)

    response = client.messages.create(
        model=model,
        max_tokens=300,
        messages=[
            {"role": "user", "content": prompt}
        ]
    )

    text = ''.join(
        block.text for block in response.content if getattr(block, 'type', None) == 'text'
    ).strip()
    if not text:
        raise ValueError("API response contained no feedback text")

    input_tokens = response.usage.input_tokens
    output_tokens = response.usage.output_tokens

    return LLMFeedback(
        feedback=text,
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cost=calculate_feedback_cost(input_tokens, output_tokens, model),
    )


def calculate_feedback_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    """USD cost of one call, from per-million-token pricing"""

    pricing = MODEL_PRICING.get(model)
    if pricing is None:
        raise ValueError(f"No pricing configured for model: {model}")

    cost = (input_tokens / 1_000_000) * pricing['input']
    cost += (output_tokens / 1_000_000) * pricing['output']
    return round(cost, 6)
