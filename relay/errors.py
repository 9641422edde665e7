"""Error hierarchy for the relay service.

Components wrap backend-specific failures (redis, httpx) in one of these
so the orchestrator and the HTTP layer deal with a single taxonomy.
"""


class RelayError(Exception):
    """Base exception for all relay errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationMissing(RelayError):
    """Raised when a required credential or URL is absent at construction.

    The affected component refuses to initialize.
    """

    def __init__(self, setting: str) -> None:
        super().__init__(f"Required configuration value is missing: {setting}")
        self.setting = setting


class StoreUnavailable(RelayError):
    """Raised when the session backend cannot be reached."""

    pass


class StoreConflict(StoreUnavailable):
    """Raised when a per-key compare-and-swap keeps losing to other writers."""

    pass


class CompletionFailed(RelayError):
    """Raised when the completion endpoint is unreachable or returns an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class DeliveryFailed(RelayError):
    """Raised when the messaging channel rejects an outbound message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class ReplyIncomplete(RelayError):
    """Raised when a reply was computed but not fully persisted or delivered.

    Persistence and delivery are attempted independently, so each failure
    is kept on its own attribute instead of being chained.
    """

    def __init__(
        self,
        session_key: str,
        *,
        persist_error: RelayError | None = None,
        delivery_error: RelayError | None = None,
        chunks_sent: int = 0,
        chunks_total: int = 0,
    ) -> None:
        failed = []
        if persist_error is not None:
            failed.append("persistence")
        if delivery_error is not None:
            failed.append("delivery")
        super().__init__(
            f"Reply for session {session_key} incomplete: {' and '.join(failed)} failed"
        )
        self.session_key = session_key
        self.persist_error = persist_error
        self.delivery_error = delivery_error
        self.chunks_sent = chunks_sent
        self.chunks_total = chunks_total
