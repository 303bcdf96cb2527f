class StorageError(Exception):
    """Base class for failures raised by the document stores."""


class CastError(StorageError):
    """A value could not be cast to a document id."""

    def __init__(self, value):
        super().__init__(f"Cast to id failed for value {value!r}")
        self.value = value


class DuplicateKeyError(StorageError):
    def __init__(self, key: str, value: str):
        super().__init__(f"duplicate key: {key}={value!r}")
        self.key = key
        self.value = value


class DocumentValidationError(StorageError):
    pass
