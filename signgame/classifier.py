"""
Heuristic letter classifier that maps hand landmark geometry to a sign letter.

Each letter is a rule over the five fingertips. Rules are tried in a fixed
order and the first one that holds wins, so when two rules overlap the letter
listed earlier is returned.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .geometry import distance, fingertips
from .types import NO_MATCH, HandPose, Landmark

logger = logging.getLogger(__name__)


# Fingertips closer than this are "touching"
NEAR_THRESHOLD = 0.1
# Fingertips farther than this are "spread apart"
FAR_THRESHOLD = 0.2


@dataclass(frozen=True)
class Tips:
    """Fingertip points of one pose."""
    thumb: Landmark
    index: Landmark
    middle: Landmark
    ring: Landmark
    pinky: Landmark

    @classmethod
    def from_pose(cls, pose: HandPose) -> "Tips":
        return cls(**fingertips(pose))


@dataclass(frozen=True)
class Rule:
    """A letter and the fingertip predicate that signals it."""
    letter: str
    description: str
    predicate: Callable[[Tips], bool]

    def matches(self, tips: Tips) -> bool:
        return self.predicate(tips)


def _y(point: Landmark) -> float:
    return point[1]


def _near(a: Landmark, b: Landmark) -> bool:
    return distance(a, b) < NEAR_THRESHOLD


def _far(a: Landmark, b: Landmark) -> bool:
    return distance(a, b) > FAR_THRESHOLD


def _highest(tip: Landmark, *others: Landmark) -> bool:
    """True if `tip` is above every other point (smaller y is higher)."""
    return all(_y(tip) < _y(o) for o in others)


def _lowest(tip: Landmark, *others: Landmark) -> bool:
    return all(_y(tip) > _y(o) for o in others)


def _fingers_bunched(t: Tips) -> bool:
    # index, middle, ring and pinky tips all touching their neighbour
    return _near(t.index, t.middle) and _near(t.middle, t.ring) and _near(t.ring, t.pinky)


def _index_middle_up(t: Tips) -> bool:
    return _y(t.index) < _y(t.thumb) and _y(t.middle) < _y(t.thumb)


def _rest_below_thumb(t: Tips) -> bool:
    return _y(t.middle) > _y(t.thumb) and _y(t.ring) > _y(t.thumb) and _y(t.pinky) > _y(t.thumb)


RULES: Tuple[Rule, ...] = (
    Rule("A", "thumb extended, other fingers closed",
         lambda t: _highest(t.thumb, t.index, t.middle, t.ring, t.pinky)),
    Rule("B", "all fingers extended, thumb closed",
         lambda t: _lowest(t.thumb, t.index, t.middle, t.ring, t.pinky)),
    Rule("C", "fingers curved into a C",
         lambda t: _fingers_bunched(t) and _far(t.thumb, t.index)),
    Rule("D", "index extended, other fingers closed",
         lambda t: _highest(t.index, t.thumb, t.middle, t.ring, t.pinky)),
    Rule("E", "all fingers curled, thumb across palm",
         lambda t: _fingers_bunched(t) and _near(t.thumb, t.index)),
    Rule("F", "thumb and index touching, other fingers extended",
         lambda t: _near(t.thumb, t.index) and _highest(t.middle, t.ring, t.pinky)),
    Rule("G", "index pointing, thumb touching middle",
         lambda t: _highest(t.index, t.thumb, t.middle, t.ring, t.pinky) and _near(t.thumb, t.middle)),
    Rule("H", "index and middle extended, ring and pinky closed",
         lambda t: _index_middle_up(t) and _y(t.ring) > _y(t.thumb) and _y(t.pinky) > _y(t.thumb)),
    Rule("I", "pinky extended, other fingers closed",
         lambda t: _highest(t.pinky, t.thumb, t.index, t.middle, t.ring)),
    Rule("K", "index and middle extended and spread",
         lambda t: _index_middle_up(t) and _far(t.index, t.middle)),
    Rule("L", "thumb and index extended, other fingers closed",
         lambda t: (_y(t.thumb) < _y(t.middle) and _y(t.index) < _y(t.middle)
                    and _lowest(t.middle, t.ring, t.pinky))),
    Rule("M", "thumb tucked under three fingers",
         lambda t: _near(t.thumb, t.index) and _near(t.index, t.middle) and _near(t.middle, t.ring)),
    Rule("N", "thumb tucked under two fingers",
         lambda t: _near(t.thumb, t.index) and _near(t.index, t.middle) and _far(t.middle, t.ring)),
    Rule("O", "fingertips curled onto the thumb",
         lambda t: all(_near(tip, t.thumb) for tip in (t.index, t.middle, t.ring, t.pinky))),
    Rule("P", "fingers pointing down below the thumb",
         lambda t: _y(t.index) > _y(t.thumb) and _rest_below_thumb(t)),
    Rule("Q", "thumb and index touching below the rest",
         lambda t: _near(t.thumb, t.index) and _rest_below_thumb(t)),
    Rule("R", "index and middle crossed",
         lambda t: _index_middle_up(t) and abs(t.index[0] - t.middle[0]) < NEAR_THRESHOLD),
    Rule("S", "fist with thumb over fingers",
         lambda t: _near(t.thumb, t.index) and _fingers_bunched(t)),
    Rule("T", "thumb between index and middle",
         lambda t: (_near(t.thumb, t.index) and _near(t.thumb, t.middle)
                    and _y(t.ring) > _y(t.thumb) and _y(t.pinky) > _y(t.thumb))),
    Rule("U", "index and middle extended together",
         lambda t: _index_middle_up(t) and _near(t.index, t.middle)),
    Rule("V", "index and middle extended and spread",
         lambda t: _index_middle_up(t) and _far(t.index, t.middle)),
    Rule("W", "index, middle and ring extended",
         lambda t: _index_middle_up(t) and _y(t.ring) < _y(t.thumb) and _y(t.pinky) > _y(t.thumb)),
    Rule("X", "index bent below middle",
         lambda t: _y(t.index) > _y(t.middle) and _highest(t.middle, t.ring, t.pinky)),
    Rule("Y", "thumb and pinky extended",
         lambda t: (_y(t.thumb) < _y(t.index) and _y(t.pinky) < _y(t.index)
                    and _lowest(t.index, t.middle, t.ring))),
    Rule("Z", "index pointing, thumb extended",
         lambda t: _y(t.index) < _y(t.thumb) and _rest_below_thumb(t)),
)

# Classifier alphabet in cascade order
LETTERS = "".join(rule.letter for rule in RULES)


def classify(pose: HandPose) -> str:
    """
    Classify a hand pose as a sign letter.

    Args:
        pose: List of 21 (x, y) landmarks in [0..1] range

    Returns:
        The letter of the first matching rule, or NO_MATCH ("") if none match
    """
    tips = Tips.from_pose(pose)
    for rule in RULES:
        if rule.matches(tips):
            logger.debug(f"Matched {rule.letter}: {rule.description}")
            return rule.letter
    return NO_MATCH


def matching_letters(pose: HandPose) -> List[str]:
    """Every letter whose rule holds for `pose`, in cascade order."""
    tips = Tips.from_pose(pose)
    return [rule.letter for rule in RULES if rule.matches(tips)]
