"""
Tests for Claude narrative feedback

The Anthropic client is mocked; no network calls are made.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from rt_scorer.evaluators.rt.api_feedback import (
    DEFAULT_FEEDBACK_MODEL,
    build_feedback_prompt,
    calculate_feedback_cost,
    generate_llm_feedback,
)
from rt_scorer.evaluators.rt.models import Difficulty, EvaluationRequest
from rt_scorer.evaluators.rt.scoring import score_transmission


GOLD = "SHEPHARD, REDCROSS 1, at Medical Bay, request taxi to Fuel Area."
TRANSCRIPT = "SHEPHARD, um, REDCROSS 1, at Medical Bay, request taxi."


@pytest.fixture
def composite():
    request = EvaluationRequest.from_dict({
        'transcript': TRANSCRIPT,
        'expected': GOLD,
        'difficulty': 'hard',
        'context': {'expectedReceiver': 'SHEPHARD', 'expectedSender': 'REDCROSS 1'},
    })
    return score_transmission(request)


def fake_response(text="Good callsign order. State the full destination next time.", input_tokens=1000, output_tokens=200):
    return SimpleNamespace(
        content=[SimpleNamespace(type='text', text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


class TestPrompt:
    """Test prompt construction"""

    def test_prompt_includes_scores(self, composite):
        prompt = build_feedback_prompt(TRANSCRIPT, GOLD, Difficulty.HARD, composite)
        assert f'"{GOLD}"' in prompt
        assert f'"{TRANSCRIPT}"' in prompt
        assert "DIFFICULTY LEVEL: HARD" in prompt
        assert f"- Structure: {composite.structure.score}/30" in prompt
        assert f"- Fluency: {composite.fluency.score}/20" in prompt


class TestGenerateFeedback:
    """Test the API call with a mocked client"""

    @patch('rt_scorer.evaluators.rt.api_feedback.Anthropic')
    def test_returns_feedback_and_cost(self, mock_anthropic, composite):
        client = MagicMock()
        client.messages.create.return_value = fake_response()
        mock_anthropic.return_value = client

        result = generate_llm_feedback(TRANSCRIPT, GOLD, Difficulty.HARD, composite, api_key='test-key')

        assert result.feedback.startswith("Good callsign order.")
        assert result.model == DEFAULT_FEEDBACK_MODEL
        assert result.input_tokens == 1000
        assert result.output_tokens == 200
        assert result.cost == pytest.approx(0.006)
        mock_anthropic.assert_called_once_with(api_key='test-key', timeout=30.0, max_retries=2)

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs['model'] == DEFAULT_FEEDBACK_MODEL
        assert "DIFFICULTY LEVEL: HARD" in kwargs['messages'][0]['content']

    @patch('rt_scorer.evaluators.rt.api_feedback.Anthropic')
    def test_key_from_environment(self, mock_anthropic, composite, monkeypatch):
        monkeypatch.setenv('ANTHROPIC_API_KEY', 'env-key')
        client = MagicMock()
        client.messages.create.return_value = fake_response()
        mock_anthropic.return_value = client

        generate_llm_feedback(TRANSCRIPT, GOLD, Difficulty.HARD, composite)

        assert mock_anthropic.call_args.kwargs['api_key'] == 'env-key'

    def test_missing_key(self, composite, monkeypatch):
        monkeypatch.delenv('ANTHROPIC_API_KEY', raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY not set"):
            generate_llm_feedback(TRANSCRIPT, GOLD, Difficulty.HARD, composite)

    @patch('rt_scorer.evaluators.rt.api_feedback.Anthropic')
    def test_unknown_model_rejected_before_call(self, mock_anthropic, composite):
        with pytest.raises(ValueError, match="No pricing"):
            generate_llm_feedback(TRANSCRIPT, GOLD, Difficulty.HARD, composite, api_key='k', model='gpt-4o')
        mock_anthropic.assert_not_called()

    @patch('rt_scorer.evaluators.rt.api_feedback.Anthropic')
    def test_empty_response(self, mock_anthropic, composite):
        client = MagicMock()
        client.messages.create.return_value = fake_response(text="   ")
        mock_anthropic.return_value = client

        with pytest.raises(ValueError, match="no feedback text"):
            generate_llm_feedback(TRANSCRIPT, GOLD, Difficulty.HARD, composite, api_key='k')


class TestCost:
    """Test token pricing"""

    def test_sonnet(self):
        assert calculate_feedback_cost(1_000_000, 1_000_000, 'claude-sonnet-4-20250514') == pytest.approx(18.0)

    def test_haiku(self):
        assert calculate_feedback_cost(500_000, 100_000, 'claude-3-5-haiku-20241022') == pytest.approx(0.8)

    def test_unknown_model(self):
        with pytest.raises(ValueError):
            calculate_feedback_cost(10, 10, 'unknown-model')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
