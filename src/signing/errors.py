class SignedUrlError(Exception):
    """Base class for failures while deriving a signed blob read url."""


class InvalidLocator(SignedUrlError, ValueError):
    """A blob locator field is empty or malformed."""


class InvalidWindow(SignedUrlError, ValueError):
    """The access window does not start before it ends."""


class LocatorResolutionFailed(SignedUrlError):
    """The authorization service could not issue a token for the locator."""
