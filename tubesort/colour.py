from collections import defaultdict

from colorama import Back, Fore, Style

from tubesort.constant import EMPTY_TOKENS

EMPTY_LABEL = "empty"


class Colour:
  """A liquid colour, identified by its normalized (trimmed, lower-cased) label.

  Instances are interned through `Colour.Of`, so there is one object per label and
  comparisons never re-normalize. The shared `EMPTY` value stands for no liquid.
  """
  __slots__ = ("label",)
  label: str

  _interned: dict[str, "Colour"] = {}

  def __init__(self, label: str) -> None:
    self.label = label

  @staticmethod
  def Normalize(token: str) -> str:
    return token.strip().lower()

  @staticmethod
  def Of(token: str, palette: set[str] = None) -> "Colour":
    """Reads a single colour token. Empty markers, and labels outside `palette` when one is given, read as EMPTY."""
    label = Colour.Normalize(token)
    if label in EMPTY_TOKENS:
      return EMPTY
    if palette is not None and label not in palette:
      return EMPTY

    colour = Colour._interned.get(label)
    if colour is None:
      colour = Colour._interned[label] = Colour(label)
    return colour

  def isEmpty(self) -> bool:
    return self.label == EMPTY_LABEL

  def displayName(self) -> str:
    return self.label.title()

  def __str__(self) -> str:
    return self.label
  def __repr__(self) -> str:
    return f"Colour({self.label!r})"
  def __eq__(self, other: object) -> bool:
    if self is other:
      return True
    if isinstance(other, Colour):
      return self.label == other.label
    return False
  def __hash__(self) -> int:
    return hash(self.label)


EMPTY = Colour(EMPTY_LABEL)
Colour._interned[EMPTY.label] = EMPTY


COLOR_CODES = defaultdict(str, {
  "mint": Back.CYAN,
  "gray": Back.LIGHTBLACK_EX + Fore.WHITE,
  "green": Back.GREEN + Fore.WHITE,
  "darkgreen": Back.BLACK + Fore.GREEN,
  "orange": Back.YELLOW + Fore.RED,
  "yellow": Back.YELLOW + Fore.BLACK,
  "red": Back.RED + Fore.WHITE,
  "purple": Back.BLACK + Fore.MAGENTA,
  "puke": Back.GREEN + Fore.BLACK,
  "pink": Back.MAGENTA,
  "brown": Back.WHITE + Fore.MAGENTA,
  "lightblue": Back.WHITE + Fore.CYAN,
  "blue": Back.BLUE + Fore.WHITE,
  "empty": Style.DIM,
})
KNOWN_COLOURS = set(label for label in COLOR_CODES if label != EMPTY.label)


def formatColour(colour: Colour, text: str = "", ljust=0) -> str:
  """Terminal colour codes for `colour`. If text is provided, the style is reset after it."""
  out = COLOR_CODES[colour.label]
  if text:
    out += text + Style.RESET_ALL
    out += " " * (ljust - len(text))
  return out
