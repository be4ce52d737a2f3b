"""Exceptions raised by the squarify layout engine."""


class SquarifyLayoutError(Exception):
    """Base class for all errors raised by this package."""


class EmptyRowError(SquarifyLayoutError, RuntimeError):
    """A row with no items reached the aspect-ratio evaluation.

    The layout loop never builds an empty row for well-formed input, so
    this always indicates a bug in the engine and aborts the layout.
    """

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "Row must contain at least one item. This is an internal "
               "layout error; please file a bug report."
        )
