"""Exception hierarchy for the fourpillars engine."""


class FourPillarsError(Exception):
    """Base class for every error raised by this package."""


class InvalidDomainValue(FourPillarsError, ValueError):
    """
    A value outside the closed stem/branch/gender domains, or a non-finite number.

    Raised at the boundary so that a bad calendar response can never
    silently produce a corrupted chart.
    """

    def __init__(self, kind: str, value, detail: str = ""):
        self.kind = kind
        self.value = value
        message = f"invalid {kind}: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class CalendarServiceError(FourPillarsError):
    """The ephemeris-backed calendar adapter could not produce a reading."""
