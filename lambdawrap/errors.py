"""
Error types for lambdawrap.

Every error carries a ``kind`` so callers can classify failures without
string matching:

- configuration: invalid function or project configuration. Raised before
  any provider call is made.
- precondition: the manager cannot start (no provider connection, missing
  deployment package).
- provider: a call to the hosting provider failed.
- not_found: the provider reported that a resource does not exist.

None of these are retried by lambdawrap.
"""


class LambdaWrapError(Exception):
    """Base exception for lambdawrap."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(LambdaWrapError, ValueError):
    """
    Invalid configuration.

    ``field`` names the offending option when the error is tied to a single
    field.
    """

    kind = "configuration"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PreconditionError(LambdaWrapError):
    """A precondition for a lifecycle operation is not met."""

    kind = "precondition"


class ClientNotInitializedError(PreconditionError):
    """Raised when an operation needs a provider and none is connected."""

    def __init__(self, message: str = "Lambda client not initialized."):
        super().__init__(message)


class MissingArtifactError(PreconditionError):
    """Raised when the deployment package cannot be found on disk."""

    def __init__(self, path):
        super().__init__(f"Deployment Package Zip File does not exist: {path}!")
        self.path = path


class ProviderError(LambdaWrapError):
    """
    A provider call failed.

    Attributes:
        operation: Provider operation that failed (e.g. ``CreateAlias``)
        code: Provider error code, if the provider returned one
    """

    kind = "provider"

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        code: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.code = code


class ResourceNotFoundError(ProviderError):
    """The provider reported that the requested resource does not exist."""

    kind = "not_found"
