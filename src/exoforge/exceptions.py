class GenerationError(Exception):
    """
    Base class for everything the generator raises on purpose
    """


class InvalidInputError(GenerationError, ValueError):
    """
    Raised when an input record or argument cannot describe a physical system,
    e.g. a non-positive orbital radius or a die with no sides
    """


class UnsatisfiableConstraintError(GenerationError):
    """
    Raised when a bounded search runs out of attempts and the result cannot
    be degraded instead
    """
