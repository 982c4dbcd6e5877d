class PmsyncError(Exception):
    """Base class for all pmsync exceptions."""
    pass

class ConfigurationError(PmsyncError):
    """Raised when client credentials or settings are missing or invalid."""
    pass

class LabelNotFoundError(ConfigurationError):
    """Raised when the sync label cannot be resolved to exactly one label."""
    pass

class AuthorizationError(PmsyncError):
    """Raised when the authorization handshake cannot produce a credential."""
    pass

class ItemFetchError(PmsyncError):
    """Raised when a single note cannot be fetched or decoded."""

    def __init__(self, item_id: str, message: str):
        super().__init__(f"{item_id}: {message}")
        self.item_id = item_id

class RemoteOperationError(PmsyncError):
    """Raised when a call to the remote mailbox fails."""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"failed to {operation}: {cause}")
        self.operation = operation
        self.cause = cause
