import pytest
from GlobAlign.seq_alignment.cli import build_parser, main


def test_textbook_run(capsys):
    assert main(["GCATGCU", "GATTACA", "1", "-1", "-1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["match: 1", "mismatch: -1", "gap: -1"]
    assert out[3] == "The optimal alignment score between GCATGCU and GATTACA is 0"
    assert "The completed score matrix:" in out
    idx = out.index("The aligned strings:")
    a1, a2 = out[idx + 1], out[idx + 2]
    assert len(a1) == len(a2)
    assert a1.replace("-", "") == "GCATGCU"
    assert a2.replace("-", "") == "GATTACA"


def test_empty_sequence(capsys):
    main(["", "AAA", "1", "-1", "-2", "--no-matrix"])
    out = capsys.readouterr().out.splitlines()
    assert "The optimal alignment score between  and AAA is -6" in out
    assert "The completed score matrix:" not in out
    assert out[-2:] == ["---", "AAA"]


def test_recursive_method(capsys):
    main(["AB", "BA", "1", "-1", "-1", "--method", "recursive", "--no-matrix"])
    out = capsys.readouterr().out.splitlines()
    assert out[-3:] == ["The aligned strings:", "-AB", "BA-"]


def test_plot_written(tmp_path, capsys):
    target = tmp_path / "matrix.png"
    main(["ACGT", "AGT", "2", "-1", "-2", "--plot", str(target)])
    assert target.exists()
    assert target.stat().st_size > 0
    assert "saved to" in capsys.readouterr().err


def test_rejects_non_integer_weight():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["A", "A", "one", "-1", "-1"])
    assert exc.value.code == 2


def test_missing_arguments():
    with pytest.raises(SystemExit) as exc:
        main(["A", "A", "1"])
    assert exc.value.code == 2
