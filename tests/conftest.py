import io
import tarfile
from collections.abc import Callable

import pytest


def _build_tar_gz(entries: list[tuple[str, bytes]]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as archive:
        for name, data in entries:
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buf.getvalue()


@pytest.fixture()
def make_tar_gz() -> Callable[[list[tuple[str, bytes]]], bytes]:
    """Build an in-memory tar.gz archive from (name, bytes) entries."""
    return _build_tar_gz


@pytest.fixture()
def short_text() -> str:
    return "Alice went to Paris. The trip was awful. She came back on Monday. Acme paid for it"
