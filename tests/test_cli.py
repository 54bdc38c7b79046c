# tests/test_cli.py

import pytest

from calchrono.cli import main


def test_list(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Hijrah-civil" in out
    assert "Reiwa" in out


def test_convert(capsys):
    assert main(["convert", "2023-07-19", "--to", "Hijrah", "--to", "Japanese"]) == 0
    out = capsys.readouterr().out
    assert "ISO CE 2023-07-19" in out
    assert "Hijrah-civil AH 1445-01-01" in out
    assert "Japanese Reiwa 5-07-19" in out


def test_date_shorthand(capsys):
    assert main(["2023-07-19", "--to", "ThaiBuddhist"]) == 0
    assert "BE 2566-07-19" in capsys.readouterr().out


def test_convert_outside_lunar_table(capsys):
    assert main(["convert", "1700-01-01", "--to", "Hijrah"]) == 0
    assert "Hijrah:" in capsys.readouterr().out


def test_resolve(capsys):
    assert main(["resolve", "year=2023", "month=2", "day=30"]) == 0
    assert "ISO CE 2023-02-28" in capsys.readouterr().out


def test_resolve_strict_failure(capsys):
    assert main(["resolve", "year=2023", "month=2", "day=30", "--style", "strict"]) == 2
    assert "error:" in capsys.readouterr().err


def test_resolve_unresolved(capsys):
    assert main(["resolve", "year=2023", "month=2"]) == 1
    assert "unresolved" in capsys.readouterr().out


def test_table(capsys):
    assert main(["-v", "table", "1445"]) == 0
    out = capsys.readouterr().out
    assert "year length: 355" in out
    assert "2023-07-19" in out


def test_bad_field_argument():
    with pytest.raises(SystemExit):
        main(["resolve", "year:2023"])
