import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure
from GlobAlign.seq_alignment import (
    GlobalAligner,
    format_matrix,
    plot_matrix,
    print_matrix,
    traceback_path,
)


class TestFormatMatrix:
    def test_layout(self):
        result = GlobalAligner(1, -1, -2).align("", "AAA")
        lines = format_matrix(result.matrix, "", "AAA").splitlines()
        assert lines == [
            " " * 12 + "     A" * 3,
            " " * 6 + "     0     1     2     3",
            "     +" + "   ---" * 4,
            "   0 |     0    -2    -4    -6",
        ]

    def test_row_labels(self):
        result = GlobalAligner().align("AC", "G")
        lines = format_matrix(result.matrix, "AC", "G").splitlines()
        assert len(lines) == 3 + 3
        assert lines[4].startswith("A  1 |")
        assert lines[5].startswith("C  2 |")

    def test_uncomputed_cells_show_inf(self):
        aligner = GlobalAligner()
        matrix, sentinel = aligner.new_matrix("AC", "AG")
        text = format_matrix(matrix, "AC", "AG", sentinel=sentinel)
        assert text.count("inf") == 9

    def test_field_width(self):
        result = GlobalAligner().align("A", "A")
        lines = format_matrix(result.matrix, "A", "A", field_width=3).splitlines()
        assert lines[3] == "   0 |  0 -1"

    def test_shape_mismatch(self):
        result = GlobalAligner().align("A", "A")
        with pytest.raises(ValueError, match="does not match"):
            format_matrix(result.matrix, "AA", "A")

    def test_print_matrix(self, capsys):
        result = GlobalAligner().align("A", "T")
        print_matrix(result.matrix, "A", "T")
        out = capsys.readouterr().out
        assert out.rstrip("\n") == format_matrix(result.matrix, "A", "T")


class TestPlotMatrix:
    def test_returns_figure(self):
        result = GlobalAligner().align("GATT", "GCAT")
        fig = plot_matrix(result.matrix, "GATT", "GCAT", title="demo")
        try:
            assert isinstance(fig, Figure)
            ax = fig.axes[0]
            assert len(ax.texts) == 25
            assert [t.get_text() for t in ax.get_xticklabels()] == ["", "G", "C", "A", "T"]
            assert ax.get_title() == "demo"
        finally:
            plt.close(fig)

    def test_path_overlay(self):
        result = GlobalAligner().align("AB", "BA")
        path = traceback_path(result.matrix, -1)
        fig = plot_matrix(result.matrix, "AB", "BA", path=path, annotate=False)
        try:
            ax = fig.axes[0]
            assert len(ax.lines) == 1
            assert list(ax.lines[0].get_xdata()) == [j for _, j in path]
            assert list(ax.lines[0].get_ydata()) == [i for i, _ in path]
            assert len(ax.texts) == 0
        finally:
            plt.close(fig)

    def test_sentinel_cells_not_annotated(self):
        matrix, sentinel = GlobalAligner().new_matrix("A", "A")
        matrix.set(0, 0, 0)
        fig = plot_matrix(matrix, "A", "A", sentinel=sentinel)
        try:
            assert len(fig.axes[0].texts) == 1
        finally:
            plt.close(fig)

    def test_annotation_contrast(self):
        # 0 is the top of the range (light viridis), -2 the bottom (dark)
        result = GlobalAligner(0, -1, -1).align("AA", "TT")
        fig = plot_matrix(result.matrix, "AA", "TT")
        try:
            colors = {t.get_text(): t.get_color() for t in fig.axes[0].texts}
            assert colors["0"] == "k"
            assert colors["-2"] == "w"
        finally:
            plt.close(fig)

    def test_fixed_text_color(self):
        result = GlobalAligner().align("A", "T")
        fig = plot_matrix(result.matrix, "A", "T", text_color="red")
        try:
            assert {t.get_color() for t in fig.axes[0].texts} == {"red"}
        finally:
            plt.close(fig)
