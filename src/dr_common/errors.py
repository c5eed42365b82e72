"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Ingestion
  2xxx: Snapshot store / query
  3xxx: Playback
  9xxx: System

A malformed price/size field inside a row has no error class: the parser
recovers it locally by treating the level as absent.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Ingestion ---

class NoFileUploadedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "No file uploaded", 400)


class StreamReadError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1002, f"Failed to read record stream: {detail}", 422)


class EmptyDatasetError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Record stream contains no records", 422)


# --- 2xxx: Snapshot store ---

class NoDatasetError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "No order book data available, upload a file first", 404)


# --- 3xxx: Playback ---

class InvalidSpeedError(AppError):
    def __init__(self, multiplier: float) -> None:
        super().__init__(3001, f"Speed multiplier must be positive, got {multiplier}", 422)


class SessionClosedError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "Playback session has been closed", 409)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
