"""Custom exception classes for holograph-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a required setting is missing or malformed."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not in the network registry."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled artifact file or directory is not found."""

    pass


class ContractNotFoundError(DeploymentError, ValueError):
    """Raised when requested contract is not present in the artifacts."""

    pass


class AddressFileNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a recorded contract address file is missing or empty."""

    pass


class EncodingError(DeploymentError, ValueError):
    """Raised when a salt, address or init payload cannot be encoded."""

    pass


class SignerError(DeploymentError, RuntimeError):
    """Raised when the remote cold storage signer fails to sign."""

    pass


class TransactionFailedError(DeploymentError, RuntimeError):
    """Raised when a submitted transaction is mined with a failed status."""

    def __init__(self, message: str, receipt=None):
        super().__init__(message)
        self.receipt = receipt


class DeploymentVerificationError(DeploymentError, RuntimeError):
    """Raised when no bytecode is found at the expected address after deploying."""

    pass
