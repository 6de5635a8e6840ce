"""
Tests for the RT structure engine

Tests [Receiver][Sender][Location][Intent] checks including:
- Callsign extraction and order
- Location detection
- Intent completeness
- Explanations
"""

import pytest
from rt_scorer.evaluators.rt.models import ScoringContext
from rt_scorer.evaluators.rt.structure import (
    evaluate_structure,
    extract_callsigns,
    detect_location,
    check_intent,
    SUCCESS_MESSAGE,
)


CONTEXT = ScoringContext(expected_receiver="SHEPHARD", expected_sender="REDCROSS 1")

CORRECT = "SHEPHARD, REDCROSS 1, at Medical Bay, request clearance to proceed to Fuel Area via Service Road ONE."


class TestCallsigns:
    """Test callsign extraction"""

    def test_order_of_appearance(self):
        assert extract_callsigns("SHEPHARD, REDCROSS 1, AT MEDICAL BAY") == ["SHEPHARD", "REDCROSS 1"]

    def test_attached_number_split(self):
        assert extract_callsigns("SHEPHARD REDCROSS1 AT GATE 5") == ["SHEPHARD", "REDCROSS 1"]

    def test_medical_is_not_medic(self):
        assert "MEDIC" not in extract_callsigns("AT MEDICAL BAY")

    def test_ground_stations(self):
        assert extract_callsigns("TOWER, SPARTAN 3, READY") == ["TOWER", "SPARTAN 3"]

    def test_none_found(self):
        assert extract_callsigns("REQUEST TAXI") == []


class TestStructureScoring:
    """Test structure scores"""

    def test_correct_structure_full_marks(self):
        result = evaluate_structure(CORRECT, CONTEXT)
        assert result.score == 30
        assert result.receiver_correct
        assert result.sender_correct
        assert result.location_present
        assert result.intent_complete
        assert result.detected_order == ["SHEPHARD", "REDCROSS 1"]
        assert result.explanation == SUCCESS_MESSAGE

    def test_swapped_callsigns(self):
        text = "REDCROSS 1, SHEPHARD, at Medical Bay, request clearance to proceed to Fuel Area."
        result = evaluate_structure(text, CONTEXT)
        assert not result.receiver_correct
        assert not result.sender_correct
        assert result.score == 10
        assert 'should be FIRST. Detected: REDCROSS 1' in result.explanation
        assert 'should be SECOND. Detected: SHEPHARD' in result.explanation

    def test_location_missing(self):
        result = evaluate_structure("SHEPHARD, REDCROSS 1, request radio check", CONTEXT)
        assert not result.location_present
        assert result.score == 25
        assert 'Location information missing' in result.explanation

    def test_location_not_required(self):
        context = ScoringContext("SHEPHARD", "REDCROSS 1", requires_location=False)
        result = evaluate_structure("SHEPHARD, REDCROSS 1, request radio check", context)
        assert result.location_present
        assert result.score == 30

    def test_spoken_callsigns_match(self):
        text = "Shepherd, Red Cross one, at the apron, request fuel"
        result = evaluate_structure(text, CONTEXT)
        assert result.receiver_correct
        assert result.sender_correct

    def test_case_and_whitespace_invariant(self):
        base = evaluate_structure(CORRECT, CONTEXT).score
        assert evaluate_structure(CORRECT.lower(), CONTEXT).score == base
        assert evaluate_structure(f"   {CORRECT.replace(' ', '   ')}   ", CONTEXT).score == base

    def test_empty_transcript(self):
        result = evaluate_structure("", CONTEXT)
        assert result.score == 0
        assert result.detected_order == []
        assert 'Detected: none' in result.explanation

    def test_empty_transcript_location_optional(self):
        context = ScoringContext("SHEPHARD", "REDCROSS 1", requires_location=False)
        assert evaluate_structure("", context).score == 5

    def test_to_dict_keys(self):
        data = evaluate_structure(CORRECT, CONTEXT).to_dict()
        assert set(data) == {
            'score', 'receiverCorrect', 'senderCorrect', 'locationPresent',
            'intentComplete', 'detectedOrder', 'explanation'
        }


class TestLocationAndIntent:
    """Test location and intent helpers"""

    def test_detect_location(self):
        assert detect_location("SHEPHARD, REDCROSS 1, AT MEDICAL BAY") is not None
        assert detect_location("HOLDING SHORT RUNWAY 27") is not None

    def test_no_location(self):
        assert detect_location("SHEPHARD, REDCROSS 1, REQUEST RADIO CHECK") is None

    def test_intent_needs_words_beyond_callsigns(self):
        assert not check_intent("SHEPHARD REDCROSS 1", ["SHEPHARD", "REDCROSS 1"])
        assert not check_intent("SHEPHARD REDCROSS 1 GO", ["SHEPHARD", "REDCROSS 1"])
        assert check_intent("SHEPHARD REDCROSS 1 REQUEST TAXI", ["SHEPHARD", "REDCROSS 1"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
