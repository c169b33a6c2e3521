"""Engine exceptions.

Collisions are not exceptions; they are reported as ``Outcome`` values.
"""


class SlitherError(Exception):
    pass


class SpawnExhausted(SlitherError):
    """No free cell could be found for a spawn within the attempt budget."""


class InvalidConfiguration(SlitherError, ValueError):
    pass


class RunNotTerminated(SlitherError):
    """A score was submitted for a run that is still in progress."""
