"""Unit tests for custom exception classes."""

import pytest

from holograph_deployments.exceptions import (
    AddressFileNotFoundError,
    ArtifactNotFoundError,
    ConfigurationError,
    ContractNotFoundError,
    DeploymentError,
    DeploymentVerificationError,
    EncodingError,
    NetworkNotFoundError,
    SignerError,
    TransactionFailedError,
)

ALL_EXCEPTIONS = [
    ConfigurationError,
    NetworkNotFoundError,
    ArtifactNotFoundError,
    ContractNotFoundError,
    AddressFileNotFoundError,
    EncodingError,
    SignerError,
    TransactionFailedError,
    DeploymentVerificationError,
]


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        """Test that ArtifactNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    def test_catch_address_file_not_found_as_file_not_found_error(self):
        """Test that AddressFileNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise AddressFileNotFoundError("test")

    def test_catch_network_not_found_as_value_error(self):
        """Test that NetworkNotFoundError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise NetworkNotFoundError("test")

    def test_catch_encoding_error_as_value_error(self):
        """Test that EncodingError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise EncodingError("test")

    def test_catch_transaction_failed_as_runtime_error(self):
        """Test that TransactionFailedError can be caught as RuntimeError."""
        with pytest.raises(RuntimeError):
            raise TransactionFailedError("test")

    def test_catch_signer_error_as_runtime_error(self):
        """Test that SignerError can be caught as RuntimeError."""
        with pytest.raises(RuntimeError):
            raise SignerError("test")

    @pytest.mark.parametrize("exc_class", ALL_EXCEPTIONS)
    def test_catch_all_as_deployment_error(self, exc_class):
        """Test that all custom exceptions can be caught as DeploymentError."""
        with pytest.raises(DeploymentError):
            raise exc_class("test")


class TestExceptionCreation:
    """Test creating exceptions with various message types."""

    def test_exceptions_accept_string_messages(self):
        """Test that all exceptions accept string messages."""
        for exc_class in [DeploymentError] + ALL_EXCEPTIONS:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_transaction_failed_keeps_receipt(self):
        """Test that TransactionFailedError carries the failed receipt."""
        receipt = {"status": 0, "transactionHash": b"\x01"}
        exc = TransactionFailedError("reverted", receipt=receipt)

        assert exc.receipt is receipt

    def test_transaction_failed_receipt_defaults_to_none(self):
        """Test that the receipt is optional."""
        assert TransactionFailedError("reverted").receipt is None
