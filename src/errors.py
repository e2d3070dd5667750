"""Exceptions raised while computing eco scores."""


class EcoScoreError(Exception):
    """Base class for all eco score errors."""


class InputError(EcoScoreError):
    """The domain list could not be read. Fatal for the whole run."""


class AuditError(EcoScoreError):
    """The Lighthouse audit could not complete for one URL."""


class SignalLookupError(EcoScoreError):
    """A hosting or geolocation lookup failed."""


class LocationUnavailableError(EcoScoreError):
    """No server location could be resolved, so the domain cannot be scored."""

    def __init__(self, message: str = "Could not determine server location"):
        super().__init__(message)


class CO2EstimationError(EcoScoreError):
    """The emissions model rejected its input."""
