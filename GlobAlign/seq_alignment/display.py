"""
Score matrix rendering: plain-text table and matplotlib heatmap
"""
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Optional, Tuple

from .score_matrix import ScoreMatrix

_LABEL_WIDTH = 6
_INDEX_WIDTH = 3


def _contrast_color(im, value) -> str:
    """Black or white, whichever reads better on the cell colour"""
    r, g, b, _ = im.cmap(im.norm(value))
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "k" if luminance > 0.5 else "w"


def format_matrix(
    matrix: ScoreMatrix,
    seq1: str,
    seq2: str,
    sentinel: Optional[int] = None,
    field_width: int = 6,
) -> str:
    """
    Render the matrix as a table with sequence characters and indices as headers.

    Column/row 0 stands for the empty prefix and carries a blank label.
    Cells equal to `sentinel` are shown as 'inf'.
    """
    row_labels = " " + seq1
    col_labels = " " + seq2
    if (len(row_labels), len(col_labels)) != matrix.shape:
        raise ValueError(
            f"Matrix shape {matrix.shape} does not match sequences "
            f"({len(seq1)}, {len(seq2)})"
        )

    lines = []
    lines.append(" " * _LABEL_WIDTH + "".join(f"{c:>{field_width}}" for c in col_labels))
    lines.append(" " * _LABEL_WIDTH + "".join(f"{col:>{field_width}}" for col in range(matrix.cols)))
    lines.append(f"{'+':>{_LABEL_WIDTH}}" + "".join(f"{'---':>{field_width}}" for _ in col_labels))

    for row, ch in enumerate(row_labels):
        cells = []
        for col in range(matrix.cols):
            value = matrix.get(row, col)
            cells.append(f"{'inf' if value == sentinel else value:>{field_width}}")
        lines.append(f"{ch}{row:>{_INDEX_WIDTH}} |" + "".join(cells))

    return "\n".join(lines)


def print_matrix(
    matrix: ScoreMatrix,
    seq1: str,
    seq2: str,
    sentinel: Optional[int] = None,
    field_width: int = 6,
) -> None:
    print(format_matrix(matrix, seq1, seq2, sentinel=sentinel, field_width=field_width))


def plot_matrix(
    matrix: ScoreMatrix,
    seq1: str,
    seq2: str,
    path: Optional[List[Tuple[int, int]]] = None,
    annotate: bool = True,
    sentinel: Optional[int] = None,
    figsize: Optional[Tuple[float, float]] = None,
    title: Optional[str] = None,
    cmap: str = "viridis",
    font_size: int = 9,
    text_color: Optional[str] = None,
) -> plt.Figure:
    """
    Draw the score matrix as a heatmap.
    - seq2 along the top (columns), seq1 down the side (rows).
    - Optional cell values and traceback path (list of (i, j) cells).
    - Sentinel cells are left blank.
    - Annotations are black on light cells and white on dark ones unless
      text_color is given.
    """
    if figsize is None:
        figsize = (max(4.0, 0.6 * matrix.cols + 2), max(3.0, 0.6 * matrix.rows + 1))
    fig, ax = plt.subplots(figsize=figsize)

    data = matrix.to_numpy()
    shown = np.ma.masked_equal(data, sentinel) if sentinel is not None else data
    im = ax.imshow(shown, cmap=cmap, interpolation="nearest")
    fig.colorbar(im, ax=ax, shrink=0.8, label="score")

    ax.set_xticks(range(matrix.cols))
    ax.set_xticklabels([""] + list(seq2), fontsize=font_size)
    ax.set_yticks(range(matrix.rows))
    ax.set_yticklabels([""] + list(seq1), fontsize=font_size)
    ax.xaxis.tick_top()

    if annotate:
        for i in range(matrix.rows):
            for j in range(matrix.cols):
                if sentinel is not None and data[i, j] == sentinel:
                    continue
                color = text_color or _contrast_color(im, data[i, j])
                ax.text(j, i, str(data[i, j]), ha="center", va="center",
                        color=color, fontsize=font_size)

    if path:
        ys, xs = zip(*path)
        ax.plot(xs, ys, "r-", lw=2, alpha=0.7)

    if title:
        ax.set_title(title, fontsize=font_size + 2, fontweight="bold")

    plt.tight_layout()
    return fig
