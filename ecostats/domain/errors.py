"""
Domain errors raised by the analysis engine.

Both kinds are recoverable: a ValidationError asks the caller to correct
the input, an InsufficientDataError asks for more plots or samples.
"""


class AnalysisError(ValueError):
    """Base class for analysis engine errors."""
    pass


class ValidationError(AnalysisError):
    """Input is malformed or out of range (negative counts, bad fractions, non-positive areas)."""
    pass


class InsufficientDataError(AnalysisError):
    """Input is valid but too sparse to fit a model."""
    pass
