from __future__ import annotations

from typing import Optional


class ExternalServiceError(Exception):
    """Failure of an outside collaborator (OCR engine, places lookup).

    Repeating the same operation is always safe; nothing persisted is touched.
    """

    retryable = True


class ScanError(ExternalServiceError):
    @classmethod
    def invalid_image(cls) -> "ScanError":
        return cls("Could not load the selected image.")

    @classmethod
    def recognition_failed(cls, exc: BaseException) -> "ScanError":
        return cls(f"Text recognition failed: {exc}")


class NearbyLookupError(ExternalServiceError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "NearbyLookupError":
        return cls(f"Places API error {status_code}: {body}", status_code=status_code)
