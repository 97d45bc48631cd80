class GpgProbeError(Exception):
    """Base class for failures that end a check in the UNKNOWN state."""


class ValidationError(GpgProbeError):
    """Invocation parameters are missing or malformed."""


class CollaboratorError(GpgProbeError):
    """The gpg utility failed or returned output we could not parse."""
