class ReportError(Exception):
    """Base class for errors raised while building a report."""
    pass


class ReportValidationError(ReportError):
    """Raised before any query runs when the report inputs are unusable,
    e.g. a blank store id or a window whose start is after its end."""
    pass
