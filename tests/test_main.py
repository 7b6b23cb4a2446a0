"""Tests for the command-line entry point."""

from __future__ import annotations

import pytest

from plotgen.__main__ import main
from plotgen.generators import PlotGenerator, WFCContradiction
from plotgen.plot import Plot


def _rows(output: str) -> list[str]:
    return output.rstrip("\n").split("\n")


class TestMain:
    def test_prints_one_row_per_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--seed", "7", "--size", "4"]) == 0

        rows = _rows(capsys.readouterr().out)
        assert len(rows) == 4
        assert all(len(row) == 8 for row in rows)
        assert set("".join(rows)) <= {"░", "▓", "█"}

    def test_default_plot_is_sixteen_square(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--seed", "1"]) == 0

        rows = _rows(capsys.readouterr().out)
        assert len(rows) == 16
        assert all(len(row) == 32 for row in rows)

    def test_same_seed_prints_same_plot(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--seed", "burrito1", "--size", "6"])
        first = capsys.readouterr().out
        main(["--seed", "burrito1", "--size", "6"])

        assert capsys.readouterr().out == first

    def test_four_connected_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--seed", "3", "--size", "5", "--four-connected"]) == 0
        assert len(_rows(capsys.readouterr().out)) == 5

    def test_invalid_size_is_a_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--size", "0"])
        assert exc.value.code == 2

    def test_contradiction_exits_with_failure(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def fail(self: PlotGenerator) -> Plot:
            raise WFCContradiction((0, 0))

        monkeypatch.setattr(PlotGenerator, "generate", fail)

        assert main(["--seed", "1", "--size", "2"]) == 1
        assert capsys.readouterr().out == ""

    def test_logger_is_named_after_module(self) -> None:
        import plotgen.__main__ as entry_point

        assert entry_point.logger.name == "plotgen.__main__"
