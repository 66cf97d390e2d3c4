import random
from typing import Dict, List, Optional, Tuple

DEFAULT_MAX_ATTEMPTS = 150


class DerangementError(Exception):
    """No assignment without a self-prompt was found within the attempt bound."""

    def __init__(self, attempts: int):
        super().__init__(f'no derangement after {attempts} swaps')
        self.attempts = attempts


def _has_own_prompt(pairs: List[List[str]], originals: Dict[str, str]) -> bool:
    return any(prompt == originals.get(name) for name, prompt in pairs)


def derange(
    originals: Dict[str, str],
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[Tuple[str, str]]:
    """Hand every author someone else's prompt.

    Swaps two random prompts until nobody holds text equal to their own
    submission, then shuffles the (name, prompt) pairs so the turn order does
    not depend on the swaps. Comparison is by content, so identical
    submissions from different authors can make this fail.

    Raises DerangementError after ``max_attempts`` swaps.
    """
    rng = rng or random.Random()
    pairs = [[name, prompt] for name, prompt in originals.items()]

    attempts = 0
    while _has_own_prompt(pairs, originals):
        attempts += 1
        if attempts > max_attempts:
            raise DerangementError(max_attempts)
        i = rng.randrange(len(pairs))
        j = rng.randrange(len(pairs))
        pairs[i][1], pairs[j][1] = pairs[j][1], pairs[i][1]

    rng.shuffle(pairs)
    return [(name, prompt) for name, prompt in pairs]
