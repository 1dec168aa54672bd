"""Exceptions raised while ingesting work-item exports."""


class RetroInsightsError(Exception):
    """
    Base class for all errors raised by Retro Insights.
    """


class EmptyInputError(RetroInsightsError):
    """
    Raised when the decoded row sequence contains no rows at all.

    This is the only condition that aborts normalization. Defects in
    individual rows are absorbed by field defaults instead.
    """


class DecodeError(RetroInsightsError):
    """
    Raised when an uploaded file cannot be decoded into rows.

    The underlying parser error is chained as ``__cause__`` but the message
    stays opaque so it can be shown to end users as-is.
    """
