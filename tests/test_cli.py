"""Tests for the piece-values command line."""

import json

import pytest

from piece_values.cli import main

SHORT_PGN = "1. e4 e5 2. Nf3 Nc6 *\n"


def _run(capsys, argv):
    main(argv)
    return json.loads(capsys.readouterr().out)


def test_default_is_starting_position(capsys):
    data = _run(capsys, [])
    assert data["white_total"] == data["black_total"] == 39.6


def test_single_square(capsys):
    data = _run(capsys, ["--fen", "8/8/8/8/3P4/8/8/8 w - - 0 1", "--square", "d4"])
    assert data["square"] == "d4"
    assert data["total"] == 2.3


def test_pgn_at_ply(capsys, tmp_path):
    path = tmp_path / "game.pgn"
    path.write_text(SHORT_PGN)
    data = _run(capsys, ["--pgn", str(path), "--ply", "1"])
    assert data["turn"] == "black"
    assert "e4" in data["values"]
    assert "e5" not in data["values"]


def test_pgn_full_game(capsys, tmp_path):
    path = tmp_path / "game.pgn"
    path.write_text(SHORT_PGN)
    data = _run(capsys, ["--pgn", str(path)])
    assert "c6" in data["values"]


def test_bad_square_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--square", "z9"])
    assert exc.value.code == 1
    assert "error" in capsys.readouterr().err


def test_bad_fen_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--fen", "garbage"])
    assert exc.value.code == 1


def test_ply_out_of_range(tmp_path, capsys):
    path = tmp_path / "game.pgn"
    path.write_text(SHORT_PGN)
    with pytest.raises(SystemExit) as exc:
        main(["--pgn", str(path), "--ply", "9"])
    assert exc.value.code == 1


def test_ply_without_pgn_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--fen", "8/8/8/8/3P4/8/8/8 w - - 0 1", "--ply", "3"])
    assert exc.value.code == 2
    assert "--ply requires --pgn" in capsys.readouterr().err
