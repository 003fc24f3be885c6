"""Wallet ledger error taxonomy.

Every failure the ledger core reports is one of these classes, so callers can map
them onto responses without parsing messages. ``code`` is a stable identifier and
``retryable`` tells the caller whether the same call may succeed later unchanged.
"""


class LedgerError(Exception):
    """Base class for wallet ledger errors."""

    code = "ledger_error"
    retryable = False


class InvalidAddressError(LedgerError):
    """Raised when an address is not exactly 64 hexadecimal characters."""

    code = "invalid_address"


class SelfTransferError(InvalidAddressError):
    """Raised when a transfer names the same wallet as payer and payee."""

    code = "self_transfer"


class InvalidAmountError(LedgerError):
    """Raised when a monetary amount is not positive or not representable."""

    code = "invalid_amount"


class InvalidCountError(LedgerError):
    """Raised when a bulk provisioning count is not a positive integer."""

    code = "invalid_count"


class DuplicateAddressError(LedgerError):
    """Raised when creating a wallet whose address already exists."""

    code = "duplicate_address"


class AddressNotFoundError(LedgerError):
    """Raised when the requested wallet does not exist."""

    code = "address_not_found"


class InsufficientFundsError(LedgerError):
    """Raised when the payer balance cannot cover a transfer."""

    code = "insufficient_funds"


class RandomSourceError(LedgerError):
    """Raised when the secure entropy source is unavailable."""

    code = "random_source_error"


class OperationCancelledError(LedgerError):
    """Raised when a caller cancels an operation before it commits."""

    code = "operation_cancelled"


class StorageError(LedgerError):
    """Base class for storage backend failures."""

    code = "storage_error"


class StorageBusyError(StorageError):
    """Raised when a lock or transaction could not be acquired in time."""

    code = "storage_busy"
    retryable = True


class StorageFailureError(StorageError):
    """Raised on non-recoverable storage failures."""

    code = "storage_failure"
