import logging
from typing import Iterable

from tubesort.colour import EMPTY
from tubesort.constant import TUBE_SIZE
from tubesort.game import Game, Move

logger = logging.getLogger(__name__)


class GameFileError(ValueError):
  """Raised when a puzzle description can't be read."""

class MoveParseError(ValueError):
  """Raised when move text isn't "<tube_from> <tube_to> <quantity>"."""


# Read game methods
def readGameFile(gameFileName: str, tubeSize: int = TUBE_SIZE, strictColours=False) -> Game:
  with open(gameFileName, "r") as gameFile:
    game = readGame(gameFile, tubeSize=tubeSize, strictColours=strictColours)
  logger.info("Read %d tubes from %s", game.getNumTubes(), gameFileName)
  return game
def readGame(lines: Iterable[str], tubeSize: int = TUBE_SIZE, strictColours=False) -> Game:
  """Reads a puzzle, one tube description per line. A blank line is an empty tube.

  The first line may hold the number of tubes instead, in which case tubes that
  aren't described start empty.
  """
  descriptions = [line.strip() for line in lines]

  numTubes: int = None
  if descriptions and _isTubeCount(descriptions[0]):
    numTubes = int(descriptions.pop(0))
    while len(descriptions) > numTubes and not descriptions[-1]:
      descriptions.pop()
    if len(descriptions) > numTubes:
      raise GameFileError(f"Expected {numTubes} tubes, but {len(descriptions)} were described")
  else:
    numTubes = len(descriptions)

  if numTubes == 0:
    raise GameFileError("No tubes were described")
  return Game.Create(descriptions, numTubes=numTubes, tubeSize=tubeSize, strictColours=strictColours)
def _isTubeCount(line: str) -> bool:
  if line.isnumeric():
    return True
  if line.lstrip("-").isnumeric():
    raise GameFileError(f"The number of tubes can't be negative: {line}")
  return False


def parseMove(moveString: str, game: Game) -> Move:
  """Reads "<tube_from> <tube_to> <quantity>", with tubes numbered from 1.

  The colour poured is whatever sits on top of the source tube right now.
  """
  parts = moveString.split()
  if len(parts) != 3:
    raise MoveParseError("Move must be in the format \"<tube_from> <tube_to> <quantity>\"")
  tubeFrom = _parseMoveNumber(parts[0], "tube from")
  tubeTo = _parseMoveNumber(parts[1], "tube to")
  quantity = _parseMoveNumber(parts[2], "quantity")

  numTubes = game.getNumTubes()
  if tubeFrom < 1 or tubeFrom > numTubes:
    raise MoveParseError(f"Unexpected 'tube from' number: {tubeFrom}")
  if tubeTo < 1 or tubeTo > numTubes:
    raise MoveParseError(f"Unexpected 'tube to' number: {tubeTo}")
  if quantity < 1 or quantity > game.tubeSize:
    raise MoveParseError(f"Unexpected 'quantity' number: {quantity}")

  top = game.tubes[tubeFrom - 1].topSegment()
  colour = top.colour if top else EMPTY
  return Move(tubeFrom - 1, tubeTo - 1, colour, quantity)
def _parseMoveNumber(word: str, name: str) -> int:
  try:
    return int(word)
  except ValueError:
    raise MoveParseError(f"Expected an integer for the '{name}' value, not {word!r}") from None
