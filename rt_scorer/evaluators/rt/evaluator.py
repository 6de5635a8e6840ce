"""
RT Evaluator - Main evaluation class

This is the primary interface. It coordinates:
- Request decoding
- Structure, accuracy and fluency scoring
- Feedback generation (rule-based, plus optional Claude narrative)
- Scenario lookups
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from .feedback import generate_feedback
from .fluency import analyze_patterns
from .models import (
    AccuracyResult, CompositeResult, Difficulty, EvaluationRequest,
    FluencyResult, ScoringParameters, StructureResult
)
from .scenarios import ScenarioContext
from .scoring import score_transmission
from .taxonomies import DEFAULT_FEEDBACK_MODEL

if TYPE_CHECKING:
    from .api_feedback import LLMFeedback


@dataclass
class RTEvaluationResult:
    """Complete evaluation output"""
    composite: CompositeResult
    difficulty: Difficulty
    feedback: Dict[str, str]
    transcript: str = ''
    expected: str = ''
    llm_feedback: Optional['LLMFeedback'] = None
    cost: float = 0.0

    @property
    def structure(self) -> StructureResult:
        return self.composite.structure

    @property
    def accuracy(self) -> AccuracyResult:
        return self.composite.accuracy

    @property
    def fluency(self) -> FluencyResult:
        return self.composite.fluency

    @property
    def total(self) -> int:
        return self.composite.total

    def to_dict(self) -> Dict[str, Any]:
        data = self.composite.to_dict()
        data['difficulty'] = self.difficulty.value
        data['feedback'] = dict(self.feedback)
        if self.llm_feedback is not None:
            data['llmFeedback'] = self.llm_feedback.to_dict()
        data['cost'] = self.cost
        return data


class RTEvaluator:
    """Main evaluator class"""

    def __init__(self):
        self.scenario_ctx = ScenarioContext()

    def load_scenarios(self, scenarios_path: str) -> None:
        """Load scenario definitions from JSON"""
        count = self.scenario_ctx.load_scenarios(scenarios_path)
        print(f"✓ Loaded {count} scenarios")

    def evaluate(
        self,
        request: Union[EvaluationRequest, Dict],
        use_api: bool = False,
        api_key: str = None,
        model: str = DEFAULT_FEEDBACK_MODEL
    ) -> RTEvaluationResult:
        """
        Main evaluation pipeline

        Scores are always rule-based. With use_api=True, Claude adds a short
        narrative on top; if that call fails the scores are returned as-is.

        Args:
            request: EvaluationRequest, or a request dict in wire format
            use_api: If True, also ask Claude for narrative feedback
            api_key: Anthropic API key (or use ANTHROPIC_API_KEY env var)
            model: Claude model for the narrative feedback

        Returns:
            RTEvaluationResult with scores, feedback and cost

        Raises:
            ValueError: if a request dict fails to decode
        """

        if not isinstance(request, EvaluationRequest):
            request = EvaluationRequest.from_dict(request)

        composite = score_transmission(request)
        feedback = generate_feedback(composite, request.context, request.difficulty)

        result = RTEvaluationResult(
            composite=composite,
            difficulty=request.difficulty,
            feedback=feedback,
            transcript=request.transcript,
            expected=request.expected,
        )

        if use_api:
            from .api_feedback import generate_llm_feedback

            try:
                llm = generate_llm_feedback(
                    request.transcript,
                    request.expected,
                    request.difficulty,
                    composite,
                    api_key=api_key,
                    model=model,
                )
                result.llm_feedback = llm
                result.cost = llm.cost
                print(f"  ✓ LLM feedback from {llm.model} (${llm.cost:.6f})")
            except Exception as e:
                print(f"  ⚠ LLM feedback failed: {e}")
                print(f"  → Returning rule-based scores only")

        return result

    def evaluate_node(
        self,
        scenario_id,
        node_id,
        transcript: str,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        parameters: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> RTEvaluationResult:
        """
        Score a transcript against one scenario node

        Args:
            parameters: Optional snake_case overrides of the difficulty defaults
            **kwargs: Passed through to evaluate() (use_api, api_key, model)

        Raises:
            ValueError: if the scenario or node is not loaded
        """

        if self.scenario_ctx.get_scenario(scenario_id) is None:
            raise ValueError(f"Unknown scenario: '{scenario_id}'")

        expectation = self.scenario_ctx.get_expectation(scenario_id, node_id)
        if expectation is None:
            raise ValueError(f"Unknown node {node_id} in scenario '{scenario_id}'")

        expected, context = expectation
        tier = Difficulty.parse(difficulty)

        request = EvaluationRequest(
            transcript=transcript or '',
            expected=expected,
            difficulty=tier,
            context=context,
            parameters=ScoringParameters.for_difficulty(tier, parameters),
        )
        return self.evaluate(request, **kwargs)

    def evaluate_batch(self, requests: Dict[str, Any], **kwargs) -> Dict[str, RTEvaluationResult]:
        """
        Evaluate multiple trainees

        Args:
            requests: Dict of {trainee_name: request}

        Returns:
            Dict of {trainee_name: RTEvaluationResult}
        """

        results = {}
        for name, request in requests.items():
            print(f"\n{'='*60}")
            print(f"Evaluating: {name}")
            print('='*60)
            results[name] = self.evaluate(request, **kwargs)

        return results

    def generate_report(self, result: RTEvaluationResult, trainee_name: str = "Trainee") -> str:
        """
        Generate a formatted report for a single evaluation

        Returns:
            Formatted markdown report string
        """

        feedback = result.feedback
        detected = ', '.join(result.structure.detected_order) or 'none'

        report = f"""# RT Phraseology Report: {trainee_name}

**Total Score:** {result.total}/100
**Difficulty:** {result.difficulty.value}

**Expected:** {result.expected}
**Transmitted:** {result.transcript}

---

## Structure: {result.structure.score}/30

{feedback.get('structure', 'N/A')}

Callsign order heard: {detected}

**Next step:** {feedback.get('structure_next', 'Keep using the standard transmission order.')}

---

## Accuracy: {result.accuracy.score}/50

{feedback.get('accuracy', 'N/A')}

**Next step:** {feedback.get('accuracy_next', 'Match the expected message closely.')}

---

## Fluency: {result.fluency.score}/20 ({result.fluency.fluency_rating})

{feedback.get('fluency', 'N/A')}

**Next step:** {feedback.get('fluency_next', 'Keep delivery smooth.')}
"""

        if result.llm_feedback is not None:
            report += f"""
---

## Instructor Notes ({result.llm_feedback.model})

{result.llm_feedback.feedback}
"""

        report += "\n---\n\n*Score Formula: Structure (30) + Accuracy (50) + Fluency (20) = Total (100)*\n"
        return report


def format_comparative_summary(results: Dict[str, RTEvaluationResult]) -> str:
    """
    Generate comparative summary across multiple trainees

    Returns:
        Formatted markdown summary
    """

    summary = "# RT Phraseology: Comparative Summary\n\n"
    summary += "| Trainee | Total | Structure | Accuracy | Fluency | Difficulty | Key Growth Area |\n"
    summary += "|---------|-------|-----------|----------|---------|------------|-----------------|\n"

    for name, result in results.items():
        structure = result.structure

        if not structure.receiver_correct or not structure.sender_correct:
            growth = "Callsign order"
        elif not structure.location_present:
            growth = "State position"
        elif result.accuracy.missing_elements:
            growth = "Include key information"
        elif result.fluency.filler_count:
            growth = "Drop filler words"
        elif result.fluency.correction_count or result.fluency.pause_indicators:
            growth = "Smoother delivery"
        else:
            growth = "Maintain standard"

        summary += (
            f"| {name} | {result.total}/100 | {structure.score}/30 | "
            f"{result.accuracy.score}/50 | {result.fluency.score}/20 | "
            f"{result.difficulty.value} | {growth} |\n"
        )

    # Group-wide patterns
    patterns = analyze_patterns([r.transcript for r in results.values()])

    summary += "\n## Group-Wide Patterns\n\n"
    if results:
        average = sum(r.total for r in results.values()) / len(results)
        summary += f"- **Average total:** {average:.1f}/100\n"
    common = ', '.join(patterns['common_fillers']) or 'none'
    summary += f"- **Most common fillers:** {common}\n"
    summary += f"- **Filler rate:** {patterns['average_filler_rate']} per 100 words\n"
    for area in patterns['improvement_areas']:
        summary += f"- **Focus:** {area}\n"

    return summary
