import logging
import sys

from tubesort.constant import DEBUG_ONLY, SOLVE_METHOD, VALID_SOLVE_METHODS
from tubesort.game import Game
from tubesort.game_files import readGame, readGameFile
from tubesort.solver import Solver


def solveGame(game: "Game", solveMethod: str = SOLVE_METHOD) -> bool:
  """Prints the search report and the solution. Returns whether a solution was found."""
  solver = Solver(game, solveMethod=solveMethod)
  moves = solver.solve()
  solver.printSolveStats()

  if moves is None:
    print("Cannot find a solution.")
    return False

  solved = game.clone()
  for move in moves:
    solved.applyMove(move)
  print("Found solution!")
  solved.printMoves()
  solved.printTubes()
  return True


def main(argv: list[str] = None) -> int:
  # Call signatures:
  # tubesort FILE? METHOD? d?
  # A missing FILE (or "-") reads the puzzle from stdin. "d" can appear anywhere
  args = list(sys.argv[1:] if argv is None else argv)
  debug = DEBUG_ONLY
  if "d" in args:
    debug = True
    args.remove("d")
  logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

  fileName: str = None
  solveMethod = SOLVE_METHOD
  for arg in args:
    if arg.upper() in VALID_SOLVE_METHODS:
      solveMethod = arg.upper()
    elif fileName is None:
      fileName = arg
    else:
      print(f"Unrecognized argument '{arg}'. Choose a method from: " + ", ".join(sorted(VALID_SOLVE_METHODS)))
      return 1

  try:
    if fileName and fileName != "-":
      game = readGameFile(fileName)
    else:
      game = readGame(sys.stdin)
  except (OSError, ValueError) as e:
    print(f"Unable to read the puzzle: {e}")
    return 1

  print("Starting state of the game:")
  game.printTubes()

  if not game.isSetupValid():
    print("The colours aren't right in this game.")
    game.printColours()
    return 1

  return 0 if solveGame(game, solveMethod) else 1


if __name__ == "__main__":
  sys.exit(main())
