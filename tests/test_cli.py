"""CLI tests: replay CSV files through indicators."""
import math

import pytest
from typer.testing import CliRunner

from tam.cli.main import app
from tam.logger import logger

runner = CliRunner()

pytestmark = pytest.mark.cli


@pytest.fixture(autouse=True)
def restore_loguru():
    """The CLI installs a console sink bound to the runner's stream."""
    yield
    logger.remove()


@pytest.fixture
def pairs_csv(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_text("x,y\n2.0,3.0\n3.0,2.0\n6.0,1.0\n5.0,2.0\n")
    return str(path)


@pytest.fixture
def bars_csv(tmp_path):
    path = tmp_path / "bars.csv"
    rows = ["Open,High,Low,Close"]
    for close in (10.0, 10.5, 10.0, 9.5, 9.0):
        rows.append(f"{close},{close + 0.5},{close - 0.5},{close}")
    path.write_text("\n".join(rows) + "\n")
    return str(path)


def _values(output: str):
    return [float(line) for line in output.strip().splitlines()]


class TestRunCommand:

    def test_correl_plain(self, pairs_csv):
        result = runner.invoke(app, ["run", "correl", pairs_csv, "--period", "3", "--plain"])

        assert result.exit_code == 0
        assert _values(result.output) == [
            0.0, -1.0, -0.9607689228305228, -0.7559289460184537
        ]

    def test_rsi_uses_close(self, bars_csv):
        result = runner.invoke(app, ["run", "rsi", bars_csv, "-p", "3", "--plain"])

        assert result.exit_code == 0
        values = _values(result.output)
        assert all(math.isnan(v) for v in values[:3])
        assert round(values[3]) == 33
        assert round(values[4]) == 22

    def test_adx_table(self, bars_csv):
        result = runner.invoke(app, ["run", "adx", bars_csv, "--period", "2", "--rounding"])

        assert result.exit_code == 0
        assert "ADX(2)" in result.output

    def test_rounding_rejected_for_rsi(self, bars_csv):
        result = runner.invoke(app, ["run", "rsi", bars_csv, "--rounding"])

        assert result.exit_code != 0

    def test_invalid_period(self, bars_csv):
        result = runner.invoke(app, ["run", "adx", bars_csv, "--period", "1"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_indicator(self, bars_csv):
        result = runner.invoke(app, ["run", "macd", bars_csv])

        assert result.exit_code == 1
        assert "Unknown indicator" in result.output

    def test_missing_columns(self, pairs_csv):
        result = runner.invoke(app, ["run", "adx", pairs_csv])

        assert result.exit_code == 1
        assert "missing columns" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["run", "rsi", str(tmp_path / "nope.csv")])

        assert result.exit_code == 1


class TestOtherCommands:

    def test_list(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        for name in ("adx", "rsi", "correl"):
            assert name in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_log_level(self):
        result = runner.invoke(app, ["--log-level", "loud", "list"])

        assert result.exit_code == 2
