"""
Pairwise Global Alignment Module
Needleman-Wunsch scoring with a linear gap penalty and single-path traceback
"""

import numpy as np
from typing import Tuple, List, Optional, Iterator, Literal, Union
from dataclasses import dataclass
from numbers import Integral
import sys
import warnings

from .score_matrix import ScoreMatrix


GAP_CHAR = "-"

# frames kept free for the caller when deciding whether recursion fits
_RECURSION_MARGIN = 200

FillMethod = Literal["iterative", "recursive"]


@dataclass(frozen=True)
class ScoringScheme:
    """Match reward, mismatch penalty and linear gap penalty"""
    match: int = 1
    mismatch: int = -1
    gap: int = -1

    def __post_init__(self):
        for name in ("match", "mismatch", "gap"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise TypeError(f"{name} must be an integer, got {value!r}")

    def substitution(self, a: str, b: str) -> int:
        return self.match if a == b else self.mismatch


@dataclass
class AlignmentResult:
    """Store alignment results and metadata"""
    seq1_aligned: str
    seq2_aligned: str
    score: int
    match_string: str
    identity: float
    gaps: int
    seq1_original: str
    seq2_original: str
    scheme: ScoringScheme
    matrix: ScoreMatrix

    def __str__(self) -> str:
        """String representation of alignment"""
        return (
            f"Alignment Score: {self.score}\n"
            f"Type: global\n"
            f"Scheme: match={self.scheme.match} "
            f"mismatch={self.scheme.mismatch} gap={self.scheme.gap}\n"
            f"Identity: {self.identity:.2%}\n"
            f"Gaps: {self.gaps}\n"
            f"Length: {len(self.seq1_aligned)}\n"
        )

    def plot(self, width: int = 80) -> None:
        """Display alignment with match indicators"""
        lines = []
        lines.append("")
        lines.append(f"Sequence 1: {self.seq1_original}")
        lines.append(f"Sequence 2: {self.seq2_original}")
        lines.append("")
        lines.append(f"Identity: {self.identity:.2%}")
        lines.append(f"Gaps: {self.gaps}")
        lines.append(f"Score: {self.score}")
        lines.append("")

        for start in range(0, len(self.seq1_aligned), width):
            end = min(start + width, len(self.seq1_aligned))
            lines.append(f"seq1: {self.seq1_aligned[start:end]}")
            lines.append(f"      {self.match_string[start:end]}")
            lines.append(f"seq2: {self.seq2_aligned[start:end]}")
            lines.append("")

        for line in lines:
            print(line)

    def view(self, width: int = 80) -> None:
        """Alias for plot method"""
        self.plot(width)

    def nmatch(self) -> int:
        """Number of matching positions"""
        return sum(1 for a, b in zip(self.seq1_aligned, self.seq2_aligned)
                   if a == b and a != GAP_CHAR)


def unreachable_score(len1: int, len2: int, scheme: ScoringScheme) -> int:
    """
    Sentinel marking an uncomputed cell

    Every alignment of the two sequences has at most len1 + len2 columns, each
    worth at most max(|match|, |mismatch|, |gap|) in absolute value, so every
    legitimate score lies in [-bound, bound] and bound + 1 is never a score.
    """
    weight = max(abs(scheme.match), abs(scheme.mismatch), abs(scheme.gap))
    sentinel = (len1 + len2) * weight + 1
    if sentinel > np.iinfo(np.int64).max:
        raise ValueError("Score range does not fit in a 64-bit matrix")
    return sentinel


def _check_shape(matrix: ScoreMatrix, seq1: str, seq2: str) -> None:
    expected = (len(seq1) + 1, len(seq2) + 1)
    if matrix.shape != expected:
        raise ValueError(
            f"Matrix shape {matrix.shape} does not match sequences, expected {expected}"
        )


def _fill_iterative(
    seq1: str,
    seq2: str,
    scheme: ScoringScheme,
    matrix: ScoreMatrix,
    sentinel: int
) -> None:
    """Bottom-up, row-major fill"""
    gap = scheme.gap
    for i in range(len(seq1) + 1):
        for j in range(len(seq2) + 1):
            if matrix.get(i, j) != sentinel:
                continue
            if i == 0 and j == 0:
                value = 0
            elif i == 0:
                value = matrix.get(0, j - 1) + gap
            elif j == 0:
                value = matrix.get(i - 1, 0) + gap
            else:
                value = max(
                    matrix.get(i - 1, j - 1) + scheme.substitution(seq1[i - 1], seq2[j - 1]),
                    matrix.get(i - 1, j) + gap,
                    matrix.get(i, j - 1) + gap
                )
            matrix.set(i, j, value)


def _fill_recursive(
    seq1: str,
    seq2: str,
    scheme: ScoringScheme,
    matrix: ScoreMatrix,
    sentinel: int
) -> None:
    """Top-down memoized fill starting from the final cell"""
    gap = scheme.gap

    def opt(i: int, j: int) -> int:
        value = matrix.get(i, j)
        if value != sentinel:
            return value

        if i == 0 and j == 0:
            value = 0
        elif i == 0:
            value = opt(0, j - 1) + gap
        elif j == 0:
            value = opt(i - 1, 0) + gap
        else:
            diag = opt(i - 1, j - 1) + scheme.substitution(seq1[i - 1], seq2[j - 1])
            up = opt(i - 1, j) + gap
            left = opt(i, j - 1) + gap
            value = max(diag, up, left)

        matrix.set(i, j, value)
        return value

    opt(len(seq1), len(seq2))


def score(
    seq1: str,
    seq2: str,
    scheme: ScoringScheme,
    matrix: ScoreMatrix,
    method: FillMethod = "iterative",
    sentinel: Optional[int] = None
) -> int:
    """
    Fill the score matrix and return the optimal global alignment score

    Parameters:
    -----------
    seq1 : str
        First sequence (rows)
    seq2 : str
        Second sequence (columns)
    scheme : ScoringScheme
        Match, mismatch and gap weights
    matrix : ScoreMatrix
        (len(seq1)+1) x (len(seq2)+1) matrix, sentinel-filled before the first call
    method : str
        "iterative" (bottom-up loop) or "recursive" (top-down memoization)
    sentinel : int, optional
        Uncomputed-cell marker; defaults to unreachable_score(...)

    Returns:
    --------
    int
        Value of the final cell (len(seq1), len(seq2))
    """
    if method not in ("iterative", "recursive"):
        raise ValueError(f"Unknown method: {method}")
    _check_shape(matrix, seq1, seq2)
    if sentinel is None:
        sentinel = unreachable_score(len(seq1), len(seq2), scheme)

    if method == "recursive":
        depth = len(seq1) + len(seq2) + 1
        if depth > sys.getrecursionlimit() - _RECURSION_MARGIN:
            warnings.warn(
                f"Recursion depth {depth} too deep for the interpreter limit, "
                f"using iterative fill",
                RuntimeWarning,
                stacklevel=2
            )
            method = "iterative"

    # cells already holding values are trusted by the fill, so verify them after
    fresh = matrix.is_blank(sentinel)

    if method == "recursive":
        _fill_recursive(seq1, seq2, scheme, matrix, sentinel)
    else:
        _fill_iterative(seq1, seq2, scheme, matrix, sentinel)

    if not fresh:
        _check_recurrence(seq1, seq2, scheme, matrix)

    return matrix.get(len(seq1), len(seq2))


def _check_recurrence(
    seq1: str,
    seq2: str,
    scheme: ScoringScheme,
    matrix: ScoreMatrix
) -> None:
    """Raise ValueError unless every cell satisfies the recurrence"""
    gap = scheme.gap
    for i in range(len(seq1) + 1):
        for j in range(len(seq2) + 1):
            if i == 0 and j == 0:
                expected = 0
            elif i == 0:
                expected = matrix.get(0, j - 1) + gap
            elif j == 0:
                expected = matrix.get(i - 1, 0) + gap
            else:
                expected = max(
                    matrix.get(i - 1, j - 1) + scheme.substitution(seq1[i - 1], seq2[j - 1]),
                    matrix.get(i - 1, j) + gap,
                    matrix.get(i, j - 1) + gap
                )
            if matrix.get(i, j) != expected:
                raise ValueError(
                    f"Matrix was not sentinel-filled: cell ({i}, {j}) holds "
                    f"{matrix.get(i, j)}, expected {expected}"
                )


def _check_boundary(matrix: ScoreMatrix, gap: int) -> None:
    for i in range(matrix.rows):
        if matrix.get(i, 0) != i * gap:
            raise ValueError("Traceback requires a fully computed matrix")
    for j in range(matrix.cols):
        if matrix.get(0, j) != j * gap:
            raise ValueError("Traceback requires a fully computed matrix")


def _walk(matrix: ScoreMatrix, gap: int) -> Iterator[Tuple[int, int, str]]:
    """
    Yield (i, j, move) from the final cell back to the origin

    Moves are 'up' (seq1 char vs gap), 'left' (gap vs seq2 char) and 'diag'.
    Ties resolve as up, then left, then diag. Raises ValueError when the
    matrix could not have been produced by the recurrence with this gap.
    """
    _check_boundary(matrix, gap)
    i, j = matrix.rows - 1, matrix.cols - 1
    while i != 0 or j != 0:
        if i == 0:
            move = "left"
        elif j == 0:
            move = "up"
        else:
            current = matrix.get(i, j)
            # a computed cell is never below either gap predecessor
            if current < matrix.get(i - 1, j) + gap or current < matrix.get(i, j - 1) + gap:
                raise ValueError("Traceback requires a fully computed matrix")
            if current - gap == matrix.get(i - 1, j):
                move = "up"
            elif current - gap == matrix.get(i, j - 1):
                move = "left"
            else:
                move = "diag"

        yield i, j, move

        if move == "up":
            i -= 1
        elif move == "left":
            j -= 1
        else:
            i -= 1
            j -= 1


def traceback(
    matrix: ScoreMatrix,
    seq1: str,
    seq2: str,
    gap: int,
    sentinel: Optional[int] = None
) -> Tuple[str, str]:
    """
    Recover one optimal alignment from a filled score matrix

    Parameters:
    -----------
    matrix : ScoreMatrix
        Matrix filled by score() with the same sequences and gap penalty
    seq1, seq2 : str
        The aligned sequences
    gap : int
        Gap penalty used to fill the matrix
    sentinel : int, optional
        When given, the matrix is rejected if any cell still holds it.
        Without it the boundary and every visited cell are still checked.

    Returns:
    --------
    (str, str)
        Gap-padded seq1 and seq2, equal length
    """
    _check_shape(matrix, seq1, seq2)
    if sentinel is not None and not matrix.is_filled(sentinel):
        raise ValueError("Traceback requires a fully computed matrix")

    aligned1, aligned2 = [], []
    for i, j, move in _walk(matrix, gap):
        if move == "up":
            aligned1.append(seq1[i - 1])
            aligned2.append(GAP_CHAR)
        elif move == "left":
            aligned1.append(GAP_CHAR)
            aligned2.append(seq2[j - 1])
        else:
            aligned1.append(seq1[i - 1])
            aligned2.append(seq2[j - 1])

    return ''.join(reversed(aligned1)), ''.join(reversed(aligned2))


def traceback_path(matrix: ScoreMatrix, gap: int) -> List[Tuple[int, int]]:
    """Cells visited by traceback, ordered from (0, 0) to the final cell"""
    path = [(i, j) for i, j, _ in _walk(matrix, gap)]
    path.append((0, 0))
    path.reverse()
    return path


def _calculate_match_string(aligned1: str, aligned2: str) -> str:
    """Generate match string"""
    match_str = []
    for a, b in zip(aligned1, aligned2):
        if a == GAP_CHAR or b == GAP_CHAR:
            match_str.append(' ')
        elif a == b:
            match_str.append('|')
        else:
            match_str.append('.')
    return ''.join(match_str)


def _calculate_statistics(aligned1: str, aligned2: str) -> Tuple[float, int]:
    """Identity and gap count"""
    matches = sum(1 for a, b in zip(aligned1, aligned2) if a == b and a != GAP_CHAR)
    gaps = aligned1.count(GAP_CHAR) + aligned2.count(GAP_CHAR)
    identity = matches / len(aligned1) if len(aligned1) > 0 else 0.0
    return identity, gaps


class GlobalAligner:
    """Global pairwise aligner with a fixed linear scoring scheme"""

    def __init__(
        self,
        match: int = 1,
        mismatch: int = -1,
        gap: int = -1,
        method: FillMethod = "iterative"
    ):
        """
        Parameters:
        -----------
        match : int
            Reward for identical characters (default 1)
        mismatch : int
            Score for differing characters (default -1)
        gap : int
            Score per gap position, usually negative (default -1)
        method : str
            Matrix fill strategy, "iterative" or "recursive"
        """
        if method not in ("iterative", "recursive"):
            raise ValueError(f"Unknown method: {method}")
        self.scheme = ScoringScheme(match, mismatch, gap)
        self.method = method

    def new_matrix(self, seq1: str, seq2: str) -> Tuple[ScoreMatrix, int]:
        """Allocate a sentinel-filled matrix for the pair"""
        sentinel = unreachable_score(len(seq1), len(seq2), self.scheme)
        return ScoreMatrix(len(seq1) + 1, len(seq2) + 1, fill=sentinel), sentinel

    def score(self, seq1: str, seq2: str) -> int:
        matrix, sentinel = self.new_matrix(seq1, seq2)
        return score(seq1, seq2, self.scheme, matrix, self.method, sentinel)

    def align(
        self,
        seq1: str,
        seq2: str,
        score_only: bool = False,
        verbose: bool = False
    ) -> Union[AlignmentResult, int]:
        """
        Perform global pairwise alignment

        Parameters:
        -----------
        seq1 : str
            First sequence
        seq2 : str
            Second sequence
        score_only : bool
            If True, return only the alignment score
        verbose : bool
            If True, report progress on stdout

        Returns:
        --------
        AlignmentResult or int
        """
        if verbose:
            print("\n" + "=" * 70)
            print("GLOBAL PAIRWISE ALIGNMENT")
            print("=" * 70)
            print(f"Sequence 1: {seq1}")
            print(f"Sequence 2: {seq2}")
            print(f"Match: {self.scheme.match}, Mismatch: {self.scheme.mismatch}, "
                  f"Gap: {self.scheme.gap}")
            print(f"Fill method: {self.method}")
            print("=" * 70)

        matrix, sentinel = self.new_matrix(seq1, seq2)

        if verbose:
            print(f"✓ Matrix initialized: {matrix.rows} x {matrix.cols}")

        best = score(seq1, seq2, self.scheme, matrix, self.method, sentinel)

        if verbose:
            print(f"✓ Matrix computation complete! Score: {best}")

        if score_only:
            return best

        aligned1, aligned2 = traceback(matrix, seq1, seq2, self.scheme.gap, sentinel)

        if verbose:
            print(f"✓ Traceback complete! Alignment length: {len(aligned1)}")

        identity, gaps = _calculate_statistics(aligned1, aligned2)

        return AlignmentResult(
            seq1_aligned=aligned1,
            seq2_aligned=aligned2,
            score=best,
            match_string=_calculate_match_string(aligned1, aligned2),
            identity=identity,
            gaps=gaps,
            seq1_original=seq1,
            seq2_original=seq2,
            scheme=self.scheme,
            matrix=matrix
        )


def pairwise(
    seq1: str,
    seq2: str,
    match: int = 1,
    mismatch: int = -1,
    gap: int = -1,
    method: FillMethod = "iterative",
    verbose: bool = False
) -> AlignmentResult:
    """
    Global alignment of two sequences in one call

    Examples:
    ---------
    >>> result = pairwise("GCATGCU", "GATTACA")
    >>> result.score
    0
    >>> result.view()
    """
    aligner = GlobalAligner(match=match, mismatch=mismatch, gap=gap, method=method)
    return aligner.align(seq1, seq2, verbose=verbose)
