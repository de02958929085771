import random
from typing import Optional


HARMLESS_LINKS = (
    "https://pointerpointer.com/",
    "https://cat-bounce.com/",
    "https://longdogechallenge.com/",
    "https://checkboxrace.com/",
    "https://pixelsfighting.com/",
    "https://puginarug.com/",
)


def pick_distraction_link(rng: Optional[random.Random] = None) -> str:
    """Return one of the harmless distraction links, uniformly at random."""
    chooser = rng or random
    return chooser.choice(HARMLESS_LINKS)
