"""
Scoring errors.
"""


class TrustShieldError(Exception):
    """Base class for scoring pipeline errors."""


class InsufficientDataError(TrustShieldError):
    """
    Raised when a statistic would be computed over zero ratings.

    Covers the dataset-wide average and per-business volatility, both of
    which are undefined without at least one rating.
    """


class EvaluationOrderError(TrustShieldError):
    """
    Raised when features or fraud confidence are requested for a business
    whose trust score has not been evaluated, or whose cached trust result
    no longer matches its ratings.
    """
