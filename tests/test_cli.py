import io
import json
import sys

import pytest

import unigma
from debug import Debug
from machine_config import MachineConfig
from utilities import interactive_config


@pytest.fixture(autouse=True)
def quiet_debug():
    before = Debug().status()
    yield
    Debug.components.update(before)


def test_one_shot_message(capsys):
    assert unigma.main(["-p", "AAA", "-m", "aaaaa"]) == 0
    assert capsys.readouterr().out == "BDZGO\n"


def test_stream_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("Aa aA!\nA"))
    assert unigma.main(["-p", "AAA"]) == 0
    assert capsys.readouterr().out == "BD ZG!\nO"


def test_stream_round_trip(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("ATTACK AT DAWN"))
    unigma.main(["-p", "XYZ", "-b", "AB CD"])
    cipher = capsys.readouterr().out

    monkeypatch.setattr(sys, "stdin", io.StringIO(cipher))
    unigma.main(["-p", "XYZ", "-b", "AB CD"])
    assert capsys.readouterr().out == "ATTACK AT DAWN"


def test_show_prints_configuration(capsys):
    assert unigma.main(["-s", "-p", "qev", "-b", "ab"]) == 0
    err = capsys.readouterr().err
    assert "Positions:  QEV (Left: Q, Middle: E, Right: V)" in err
    assert "Plugboard:  AB" in err


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-p", "AB"], "exactly 3 letters"),
        (["-p", "A1C"], "Invalid rotor position '1'"),
        (["-b", "ABC"], "exactly 2 letters"),
        (["-b", "AB BC"], "already used"),
        (["-p", "AA\u00df"], "Must be A-Z"),
        (["-p", "AA\u0131"], "Must be A-Z"),
        (["-b", "A\u00df"], "Must be A-Z"),
    ],
)
def test_configuration_errors_exit_1(argv, message, capsys):
    assert unigma.main(argv + ["-m", "X"]) == 1
    captured = capsys.readouterr()
    assert message in captured.err
    assert captured.out == ""


@pytest.mark.parametrize("argv", [["-x"], ["-p"], ["--plugboard"], ["--debug", "nope"]])
def test_usage_errors_exit_1(argv, capsys):
    assert unigma.main(argv) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "usage: unigma" in err


def test_key_sheet_load_and_override(tmp_path, capsys):
    sheet = tmp_path / "sheet.json"
    sheet.write_text(json.dumps({"positions": "ZZZ", "plugboard": ""}), encoding="utf-8")

    assert unigma.main(["--config", str(sheet), "-p", "AAA", "-m", "AAAAA"]) == 0
    assert capsys.readouterr().out == "BDZGO\n"


def test_missing_key_sheet_exits_1(tmp_path, capsys):
    assert unigma.main(["--config", str(tmp_path / "absent.json"), "-m", "A"]) == 1
    assert "cannot read key sheet" in capsys.readouterr().err


def test_save_config(tmp_path, capsys):
    sheet = tmp_path / "out.json"
    assert unigma.main(["-p", "QEV", "-b", "xy", "--save-config", str(sheet), "-s"]) == 0
    assert json.loads(sheet.read_text(encoding="utf-8")) == {"positions": "QEV", "plugboard": "XY"}


def test_no_arguments_goes_interactive(monkeypatch, capsys):
    monkeypatch.setattr(unigma, "interactive_config", lambda **kw: MachineConfig.from_settings("AAA"))
    monkeypatch.setattr(sys, "stdin", io.StringIO("AAAAA"))
    assert unigma.main([]) == 0
    assert capsys.readouterr().out == "BDZGO"


def test_debug_flag_enables_component(capsys):
    assert unigma.main(["--debug", "stepping", "-m", "A"]) == 0
    assert Debug().status()["stepping"] is True


def test_interactive_prompts_reask_on_errors():
    answers = iter(["ab", "QEV", "AB BC", "ab cd"])
    said = []
    cfg = interactive_config(reader=lambda prompt: next(answers), writer=said.append)

    assert cfg.positions == "QEV"
    assert str(cfg.plugboard) == "AB CD"
    assert sum(line.startswith("❌") for line in said) == 2


def test_interactive_defaults_on_enter():
    answers = iter(["", ""])
    said = []
    cfg = interactive_config(reader=lambda prompt: next(answers), writer=said.append)

    assert cfg == MachineConfig.from_settings()
    assert "USING DEFAULT: AAA" in said
    assert "NO PLUGBOARD" in said


def test_interactive_prompts_stay_off_stdout(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("aaa\n\nAAAAA"))
    assert unigma.main(["--interactive"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "BDZGO"
    assert "ROTOR POSITIONS" in captured.err
    assert "PLUGBOARD PAIRS" in captured.err


def test_interactive_at_end_of_input_uses_defaults(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert unigma.main(["--interactive"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "USING DEFAULT: AAA" in captured.err


def test_unwritable_key_sheet_exits_1(tmp_path, capsys):
    target = tmp_path / "missing" / "sheet.json"
    assert unigma.main(["-p", "AAA", "--save-config", str(target), "-m", "A"]) == 1
    captured = capsys.readouterr()
    assert "cannot write key sheet" in captured.err
    assert captured.out == ""


def test_groups_of_five(capsys):
    assert unigma.main(["-p", "AAA", "-g", "-m", "aaa aa, aaaaa"]) == 0
    out = capsys.readouterr().out
    assert out.count(" ") == 1
    assert out.startswith("BDZGO ")
    assert len(out.strip().replace(" ", "")) == 10
