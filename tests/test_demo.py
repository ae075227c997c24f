"""Smoke test for the demo script."""

from primefield.demo import run_demo


def test_demo_output(capsys):
    run_demo.main(["5", "7"])
    out = capsys.readouterr().out
    assert "GF(5) lookup table" in out
    assert "3 / 2 = 4   and   4 * 2 = 3" in out
    assert "sqrt(2) -> NoSquareRootError" in out
    assert "1 / 0 -> FieldZeroDivisionError" in out
    assert "DEMO COMPLETE" in out


def test_demo_defaults(capsys):
    run_demo.main([])
    out = capsys.readouterr().out
    assert "GF(5)" in out and "GF(7)" in out
