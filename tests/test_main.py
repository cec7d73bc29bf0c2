import io

import pytest

from tubesort.main import main

SOLVABLE = "red,blue,red,blue\nblue,red,blue,red\n\n\n"


@pytest.fixture
def puzzle(tmp_path):
  path = tmp_path / "puzzle.txt"
  path.write_text(SOLVABLE)
  return str(path)


@pytest.mark.parametrize("method", [[], ["bfs"], ["DFS"], ["Bucket"]])
def test_solves_a_puzzle_file(puzzle, method, capsys):
  assert main([puzzle] + method) == 0
  out = capsys.readouterr().out
  assert "Starting state of the game:" in out
  assert "Finished search algorithm:" in out
  assert "Found solution!" in out
  assert "1 : (" in out


def test_method_may_come_first(puzzle, capsys):
  assert main(["bfs", puzzle, "d"]) == 0
  assert "BFS" in capsys.readouterr().out


def test_reads_stdin(monkeypatch, capsys):
  monkeypatch.setattr("sys.stdin", io.StringIO(SOLVABLE))
  assert main([]) == 0
  assert "Found solution!" in capsys.readouterr().out


def test_reads_stdin_for_dash(monkeypatch, capsys):
  monkeypatch.setattr("sys.stdin", io.StringIO(SOLVABLE))
  assert main(["-", "dfs"]) == 0


def test_unrecognized_argument(puzzle, capsys):
  assert main([puzzle, "other.txt"]) == 1
  assert "Unrecognized argument 'other.txt'" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
  assert main([str(tmp_path / "missing.txt")]) == 1
  assert "Unable to read the puzzle" in capsys.readouterr().out


def test_too_few_tubes(tmp_path, capsys):
  path = tmp_path / "small.txt"
  path.write_text("red,red,red,red\n\n\n")
  assert main([str(path)]) == 1
  assert "Unable to read the puzzle" in capsys.readouterr().out


def test_invalid_setup(tmp_path, capsys):
  path = tmp_path / "bad.txt"
  path.write_text("red,red,red\nblue,blue,blue,blue\n\n\n")
  assert main([str(path)]) == 1
  out = capsys.readouterr().out
  assert "The colours aren't right in this game." in out
  assert "(too few)" in out
  assert "Found solution!" not in out
