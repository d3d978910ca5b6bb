from __future__ import annotations


class AndroidBuildError(RuntimeError):
    """Base class for failures the generator reports back to the caller."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFields(AndroidBuildError):
    kind = "missing_fields"
    status_code = 400

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidIconFormat(AndroidBuildError):
    kind = "invalid_icon_format"
    status_code = 400


class StorageProvisionError(AndroidBuildError):
    kind = "storage_provision_error"


class UploadExhausted(AndroidBuildError):
    kind = "upload_exhausted"

    def __init__(self, *, attempts: int, last_error: str) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed to upload APK after {attempts} attempts: {last_error or 'Unknown error'}")


class InternalAssemblyError(AndroidBuildError):
    kind = "internal_assembly_error"


class StorageError(RuntimeError):
    """Raised by storage adapters when the backing service reports a failure."""
