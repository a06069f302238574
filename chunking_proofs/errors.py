"""
Errors raised when creating or verifying a proof of correct chunking.

Only two kinds are exposed. InvalidProofError deliberately carries the same
message whichever check failed.
"""


class ChunkingProofError(ValueError):
    """Base class for chunking proof failures."""


class InvalidInstanceError(ChunkingProofError):
    """The public instance is structurally malformed."""

    def __init__(self, message: str = "invalid chunking instance"):
        super().__init__(message)


class InvalidProofError(ChunkingProofError):
    """The proof does not verify against the instance."""

    def __init__(self):
        super().__init__("invalid chunking proof")
