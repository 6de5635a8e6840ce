"""
Tests for the RT accuracy engine

Tests the three difficulty strategies including:
- Word-level edit distance, alignment and WER
- Easy: key element presence
- Medium: key elements blended with phrase overlap
- Hard: WER scoring and threshold annotation
"""

import pytest
from rt_scorer.evaluators.rt.accuracy import (
    evaluate_accuracy,
    extract_key_elements,
    element_present,
    phrase_overlap,
)
from rt_scorer.evaluators.rt.edit_distance import (
    edit_distance,
    word_error_rate,
    align_sequences,
)
from rt_scorer.evaluators.rt.models import Difficulty


GOLD = "SHEPHARD, REDCROSS 1, at Medical Bay, request clearance to proceed to Fuel Area via Service Road ONE."

RUNWAY_GOLD = "SHEPHARD, REDCROSS 1, holding short of runway 27, request crossing."


class TestEditDistance:
    """Test Levenshtein distance and WER"""

    def test_identical(self):
        assert edit_distance(["A", "B", "C"], ["A", "B", "C"]) == 0

    def test_single_deletion(self):
        assert edit_distance(["A", "B", "C"], ["A", "C"]) == 1

    def test_empty_side(self):
        assert edit_distance([], ["A"]) == 1
        assert edit_distance(["A", "B"], []) == 2

    def test_classic_example(self):
        assert edit_distance(list("kitten"), list("sitting")) == 3

    def test_wer_empty_reference(self):
        assert word_error_rate([], []) == 0.0
        assert word_error_rate(["A"], []) == 1.0

    def test_wer_ratio(self):
        assert word_error_rate(["A", "X"], ["A", "B"]) == 0.5

    def test_wer_can_exceed_one(self):
        assert word_error_rate(["A", "B", "C"], ["X"]) == 3.0

    def test_alignment_path(self):
        ops = align_sequences(["A", "B", "C"], ["A", "C"])
        assert ops == [("match", 0, 0), ("del", 1, None), ("match", 2, 1)]

    def test_alignment_insertion(self):
        ops = align_sequences(["A"], ["A", "B"])
        assert ops == [("match", 0, 0), ("ins", None, 1)]

    def test_alignment_substitution(self):
        ops = align_sequences(["RUNWAY", "27"], ["RUNWAY", "72"])
        assert ops == [("match", 0, 0), ("sub", 1, 1)]

    def test_alignment_empty_sides(self):
        assert align_sequences([], []) == []
        assert align_sequences(["A", "B"], []) == [("del", 0, None), ("del", 1, None)]
        assert align_sequences([], ["A"]) == [("ins", None, 0)]

    @pytest.mark.parametrize("ref,hyp", [
        ("SHEPHARD REDCROSS 1 REQUEST TAXI", "REDCROSS 1 SHEPHARD REQUEST TAXI"),
        ("HOLDING SHORT RUNWAY 27", "HOLDING RUNWAY 27 SHORT"),
        ("A B C D", "X Y"),
        ("REQUEST", "UM REQUEST REQUEST"),
    ])
    def test_alignment_cost_matches_distance(self, ref, hyp):
        """Every non-match step costs one, so the path cost is the distance"""
        ref, hyp = ref.split(), hyp.split()
        ops = align_sequences(ref, hyp)
        assert sum(1 for op, _, _ in ops if op != "match") == edit_distance(ref, hyp)
        assert [r for _, r, _ in ops if r is not None] == list(range(len(ref)))
        assert [h for _, _, h in ops if h is not None] == list(range(len(hyp)))


class TestEasyMode:
    """Test key element matching"""

    def test_identical_full_marks(self):
        result = evaluate_accuracy(GOLD, GOLD, Difficulty.EASY)
        assert result.score == 50
        assert result.missing_elements == []
        assert result.explanation == "All key information present (100% match)."

    def test_missing_runway(self):
        transcript = "SHEPHARD, REDCROSS 1, holding short, request crossing."
        result = evaluate_accuracy(transcript, RUNWAY_GOLD, "easy")
        assert "RUNWAY 27" in result.missing_elements
        assert result.score < 50
        assert result.score == 42
        assert result.explanation == "83% semantic match. Missing: RUNWAY 27"

    def test_key_elements(self):
        elements = extract_key_elements(
            "SHEPHARD, REDCROSS 1, HOLDING SHORT OF RUNWAY 27, REQUEST CROSSING."
        )
        assert elements == ["SHEPHARD", "REDCROSS 1", "REQUEST", "HOLDING SHORT", "RUNWAY 27", "1"]

    def test_spelled_numbers_match(self):
        result = evaluate_accuracy("request runway two seven", "REQUEST RUNWAY 27", "easy")
        assert result.score == 50

    def test_number_homophone_matches(self):
        result = evaluate_accuracy("request runway for", "REQUEST RUNWAY FOUR", "easy")
        assert result.missing_elements == []
        assert result.score == 50

    def test_whole_word_containment(self):
        assert not element_present("1", "REDCROSS 12")
        assert element_present("1", "REDCROSS 1,")

    def test_missing_preview_truncated(self):
        result = evaluate_accuracy("", RUNWAY_GOLD, "easy")
        assert result.score == 0
        assert "(+3 more)" in result.explanation

    def test_semantic_score_reported(self):
        data = evaluate_accuracy(GOLD, GOLD, "easy").to_dict()
        assert data['semanticScore'] == 1.0
        assert 'werScore' not in data


class TestMediumMode:
    """Test balanced scoring"""

    def test_identical_full_marks(self):
        result = evaluate_accuracy(GOLD, GOLD, Difficulty.MEDIUM)
        assert result.score == 50
        assert result.explanation == "Balanced scoring: 100% semantic match, 100% phrase match."

    def test_single_word_expected(self):
        assert phrase_overlap("ROGER", "ROGER") == 1.0
        assert evaluate_accuracy("roger", "ROGER", "medium").score == 50
        assert evaluate_accuracy("wilco", "ROGER", "medium").score == 20

    def test_reordered_words_lose_phrase_points(self):
        result = evaluate_accuracy("request taxi runway 27", "REQUEST RUNWAY 27 TAXI", "medium")
        assert result.phrase_score < 1.0
        assert result.score < 50

    def test_unknown_difficulty_is_medium(self):
        medium = evaluate_accuracy("request taxi", GOLD, "medium")
        unknown = evaluate_accuracy("request taxi", GOLD, "extreme")
        assert unknown.score == medium.score
        assert unknown.explanation == medium.explanation


class TestHardMode:
    """Test WER scoring"""

    def test_identical_full_marks(self):
        result = evaluate_accuracy(GOLD, GOLD, Difficulty.HARD)
        assert result.score == 50
        assert result.wer_score == 0
        assert result.missing_elements == []
        assert result.explanation == "Word Error Rate: 0%. Within acceptable threshold."

    def test_one_word_missing(self):
        result = evaluate_accuracy("request taxi runway 27", "REQUEST TAXI TO RUNWAY 27", "hard")
        assert result.wer_score == 20
        assert result.score == 40
        assert result.missing_elements == ["TO"]
        assert result.matched_elements == ["REQUEST", "TAXI", "RUNWAY", "27"]
        assert "Within acceptable threshold." in result.explanation

    def test_threshold_only_annotates(self):
        within = evaluate_accuracy("request taxi runway 27", "REQUEST TAXI TO RUNWAY 27", "hard", wer_threshold=20)
        beyond = evaluate_accuracy("request taxi runway 27", "REQUEST TAXI TO RUNWAY 27", "hard", wer_threshold=15)
        assert within.score == beyond.score
        assert beyond.explanation == "Word Error Rate: 20%. Exceeds 15% threshold."

    def test_floor_at_zero(self):
        result = evaluate_accuracy("one two three four five six", "ROGER", "hard")
        assert result.score == 0

    def test_both_empty(self):
        assert evaluate_accuracy("", "", "hard").score == 50

    def test_wer_score_reported(self):
        data = evaluate_accuracy(GOLD, GOLD, "hard").to_dict()
        assert data['werScore'] == 0
        assert 'semanticScore' not in data


class TestBounds:
    """Scores stay in range for any input"""

    @pytest.mark.parametrize("difficulty", ["easy", "medium", "hard", "bogus"])
    @pytest.mark.parametrize("transcript,expected", [
        ("", ""),
        ("", GOLD),
        (GOLD, ""),
        ("um uh er", GOLD),
        (GOLD + " " + GOLD, GOLD),
    ])
    def test_score_in_range(self, difficulty, transcript, expected):
        score = evaluate_accuracy(transcript, expected, difficulty).score
        assert isinstance(score, int)
        assert 0 <= score <= 50


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
