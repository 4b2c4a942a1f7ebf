class StoreError(Exception):
    """Base class for failures talking to the backing database."""


class StoreReadFailed(StoreError):
    pass


class StoreWriteFailed(StoreError):
    pass
