from __future__ import annotations


class MemoryGraphError(Exception):
    """Base error; `status_code` is the HTTP status the server layer renders."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientError(MemoryGraphError):
    status_code = 400


class InvalidQueryError(ClientError):
    pass


class DestructiveQueryError(ClientError):
    pass


class UnknownPresetError(ClientError):
    def __init__(self, preset: str) -> None:
        super().__init__(f"Unknown preset '{preset}'")
        self.preset = preset


class InvalidIdentifierError(ClientError):
    pass


class GraphStoreError(MemoryGraphError):
    """Statement execution or connectivity failure reported by the store."""

    status_code = 500
