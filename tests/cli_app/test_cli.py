"""
Seed script and interactive CLI, driven end to end on a SQLite file.

Input is scripted through a patched ``input()``; output is checked loosely.
"""

import builtins

import pytest

from scripts import seed_data
from scripts.cli import config as cli_config
from scripts.cli.main import main as run_cli


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("PIZZERIA_CONFIG", raising=False)
    monkeypatch.setattr(cli_config, "LOG_DIR", tmp_path / "logs")
    return url


def _script_input(monkeypatch, answers):
    feed = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


class TestSeedScript:
    def test_seed_then_reseed(self, cli_env, capsys):
        assert seed_data.main([]) == 0
        out = capsys.readouterr().out
        assert "Inserted 13, already present 0." in out

        assert seed_data.main([]) == 0
        assert "Inserted 0, already present 13." in capsys.readouterr().out

    def test_reset(self, cli_env, capsys):
        seed_data.main([])
        capsys.readouterr()
        assert seed_data.main(["--reset"]) == 0
        assert "Inserted 13" in capsys.readouterr().out


class TestInteractiveCli:
    def test_seed_place_order_and_reports(self, cli_env, monkeypatch, capsys):
        _script_input(
            monkeypatch,
            [
                "y",        # load default seed
                "1",        # place an order
                "1",        # Carlos
                "3 2",      # Margarita x2 (menu sorted by category, then name)
                "",         # done
                "2",        # top ingredients
                "3",        # average price per category
                "4",        # best-selling category
                "5",        # recent orders
                "S",        # stock and couriers
                "Q",
            ],
        )

        assert run_cli() == 0
        out = capsys.readouterr().out

        assert "placed for Carlos" in out
        assert "Total: $40,000" in out
        assert "Mozzarella" in out
        assert "especial" in out
        assert "tradicional: 2 unit(s) sold" in out
        assert "2 x Margarita" in out
        assert "Goodbye." in out

    def test_failed_order_is_reported(self, cli_env, monkeypatch, capsys):
        answers = ["y"]
        # Three couriers: the fourth order has nobody to deliver it.
        for _ in range(4):
            answers += ["1", "1", "3", ""]
        answers.append("Q")
        _script_input(monkeypatch, answers)

        assert run_cli() == 0
        out = capsys.readouterr().out
        assert out.count("placed for Carlos") == 3
        assert "FAILED: NO_COURIER_AVAILABLE" in out

    def test_main_submodule_is_not_shadowed(self):
        import scripts.cli
        import scripts.cli.main  # noqa: F401

        assert scripts.cli.main.main is run_cli


class TestCliUtil:
    def test_fmt_amount_rounds_to_whole_pesos(self):
        from scripts.cli.util import fmt_amount

        assert fmt_amount("46000.00") == "$46,000"

    @pytest.mark.parametrize("raw, expected", [("1", 0), ("3", 2), ("4", None), ("0", None), ("x", None), (None, None)])
    def test_pick_index(self, raw, expected):
        from scripts.cli.util import pick_index

        assert pick_index(raw, 3) == expected
