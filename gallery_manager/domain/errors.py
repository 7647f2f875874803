"""Gallery error kinds."""
from typing import Optional, Sequence


class GalleryError(Exception):
    """Base exception for gallery operations."""
    pass


class ValidationFailed(GalleryError):
    """Bad category, empty batch, or a file that fails the accept rule."""
    pass


class NotFound(GalleryError):
    """No item with the given id."""

    def __init__(self, item_id: str):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id


class BackendUnavailable(GalleryError):
    """The storage backend could not be reached or failed at transport level."""
    pass


class PartialBatchFailure(GalleryError):
    """A batch create failed.

    The whole batch is treated as failed. Only the first error is kept;
    ``succeeded`` lists the request indices whose asset upload completed,
    so the caller can resubmit just the rest.
    """

    def __init__(
        self,
        cause: BaseException,
        failed_index: Optional[int],
        succeeded: Sequence[int] = ()
    ):
        where = f" at index {failed_index}" if failed_index is not None else ""
        super().__init__(f"Batch upload failed{where}: {cause}")
        self.cause = cause
        self.failed_index = failed_index
        self.succeeded = list(succeeded)
