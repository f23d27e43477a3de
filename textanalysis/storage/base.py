from abc import ABC, abstractmethod


class BaseObjectStorage(ABC):
    """Contract for object storage adapters."""

    @abstractmethod
    def download(self, bucket: str, key: str) -> bytes:
        """Fetch an object's full contents.

        Raises:
            DownloadError: if the object cannot be fetched.
        """
