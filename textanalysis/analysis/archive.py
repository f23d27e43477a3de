import io
import tarfile
import zlib

from textanalysis.analysis.exceptions import DecodeError


def extract_first_entry(archive_bytes: bytes) -> bytes:
    """Return the contents of the first file in a gzip-compressed tar archive.

    Detection jobs write exactly one output file per archive, so any further
    entries are ignored.

    Raises:
        DecodeError: if the bytes are not a valid tar.gz stream or hold no file.
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(archive_bytes), mode="r:gz") as archive:
            for member in archive:
                if not member.isfile():
                    continue
                extracted = archive.extractfile(member)
                if extracted is None:
                    continue
                return extracted.read()
    except (tarfile.TarError, zlib.error, EOFError, OSError) as exc:
        raise DecodeError(f"Invalid output archive: {exc}") from exc
    raise DecodeError("Output archive contains no entries")
