class InputError(ValueError):
    """Raised when the pipeline has nothing usable to work with."""


class ScorerError(RuntimeError):
    """The external AI scorer answered with something we cannot trust."""
