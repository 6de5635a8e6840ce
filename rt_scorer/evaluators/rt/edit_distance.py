"""
Edit Distance - Word-level Levenshtein distance, alignment and WER
"""

from typing import List, Optional, Sequence, Tuple


def edit_distance(ref: Sequence[str], hyp: Sequence[str]) -> int:
    """
    Levenshtein distance with unit insertion/deletion/substitution costs

    Keeps two rows only, sized by the shorter sequence.
    """

    if len(ref) < len(hyp):
        ref, hyp = hyp, ref

    previous = list(range(len(hyp) + 1))
    for i in range(1, len(ref) + 1):
        current = [i] + [0] * len(hyp)
        for j in range(1, len(hyp) + 1):
            cost = 0 if ref[i - 1] == hyp[j - 1] else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution / match
            )
        previous = current

    return previous[-1]


def word_error_rate(hypothesis: Sequence[str], reference: Sequence[str]) -> float:
    """
    WER = edit distance / reference length

    Empty reference: 0.0 when the hypothesis is empty too, otherwise 1.0.
    """

    if not reference:
        return 0.0 if not hypothesis else 1.0
    return edit_distance(reference, hypothesis) / len(reference)


Step = Tuple[str, Optional[int], Optional[int]]


def align_sequences(ref: Sequence[str], hyp: Sequence[str]) -> List[Step]:
    """
    Word alignment as a list of (op, ref_index, hyp_index)

    op is one of:
      match -> word said as expected
      sub   -> expected word replaced by another word
      del   -> expected word left out
      ins   -> extra word not in the expected message

    Ties prefer match, then sub, then del, then ins. The number of
    non-match steps always equals edit_distance(ref, hyp).
    """

    table = _cost_table(ref, hyp)

    steps: List[Step] = []
    i, j = len(ref), len(hyp)
    while i or j:
        here = table[i][j]
        if i and j and ref[i - 1] == hyp[j - 1] and table[i - 1][j - 1] == here:
            steps.append(("match", i - 1, j - 1))
            i, j = i - 1, j - 1
        elif i and j and table[i - 1][j - 1] + 1 == here:
            steps.append(("sub", i - 1, j - 1))
            i, j = i - 1, j - 1
        elif i and table[i - 1][j] + 1 == here:
            steps.append(("del", i - 1, None))
            i -= 1
        else:
            steps.append(("ins", None, j - 1))
            j -= 1

    steps.reverse()
    return steps


def _cost_table(ref: Sequence[str], hyp: Sequence[str]) -> List[List[int]]:
    """table[i][j] = edit distance between ref[:i] and hyp[:j]"""

    table = [list(range(len(hyp) + 1))]
    for i in range(1, len(ref) + 1):
        row = [i]
        above = table[-1]
        for j in range(1, len(hyp) + 1):
            same = ref[i - 1] == hyp[j - 1]
            row.append(min(
                above[j] + 1,
                row[j - 1] + 1,
                above[j - 1] + (0 if same else 1),
            ))
        table.append(row)
    return table
