""" Exception types raised by the particle filter """


class InvalidConfiguration(ValueError):
    """ Raised when the filter is configured with a non-positive particle
    count or a negative noise standard deviation """


class InputContractViolation(ValueError):
    """ Raised when the measurement vector does not line up with the landmarks """


class EmptyPopulation(RuntimeError):
    """ Raised when a reduction is requested over a population with no particles """


class DegenerateWeights(RuntimeWarning):
    """ Warning issued when every particle weight has collapsed to zero """
