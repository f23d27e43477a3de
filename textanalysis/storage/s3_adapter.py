import io
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textanalysis.analysis.exceptions import DownloadError
from textanalysis.logging.logger import Log
from textanalysis.storage.base import BaseObjectStorage


class S3StorageAdapter(BaseObjectStorage):
    """Reads objects from S3 using a boto3 client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def download(self, bucket: str, key: str) -> bytes:
        Log.info(f"Downloading s3://{bucket}/{key}")
        buffer = io.BytesIO()
        try:
            self._client.download_fileobj(bucket, key, buffer)
        except (ClientError, BotoCoreError) as exc:
            raise DownloadError(f"Unable to download item {key!r} from {bucket}: {exc}") from exc
        return buffer.getvalue()
