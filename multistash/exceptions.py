class StashError(Exception):
    """Base class for errors raised by multistash."""


class InvalidKeyError(StashError, LookupError):
    """Raised when an operation needs an occupied slot but the key is
    out of range or addresses a free slot."""


__all__ = ["StashError", "InvalidKeyError"]
