"""Exception types for photometa."""


class PhotometaError(Exception):
    """Base class for photometa errors."""


class DecodeError(PhotometaError):
    """Image metadata or dimensions could not be decoded.

    Fatal to the analysis in progress; no record is produced.
    """


class FetchError(PhotometaError):
    """Image could not be fetched from a URL."""


class RemoteVerifierError(PhotometaError):
    """Base class for remote verifier errors."""


class ConfigurationError(RemoteVerifierError):
    """Remote verifier was invoked without usable credentials."""


class RemoteAnalysisError(RemoteVerifierError):
    """Remote analysis failed (network, API status, timeout or parse)."""


class MalformedResponseError(RemoteAnalysisError):
    """Remote model reply was not a JSON object of the expected shape."""


class AnalyticsError(PhotometaError):
    """Analytics report could not be fetched."""
