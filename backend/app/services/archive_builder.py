"""
In-memory ZIP archive assembly.

Entries are flat filenames; identical names are written as separate
entries (ZIP allows it, extractors usually keep the last one).
The whole archive is built in memory, so very large bundles are bounded
by process memory.
"""
import io
import zipfile
from typing import List

from app.models.bundle import ArchiveEntry

# Fixed entry timestamp so the same entries always produce the same bytes
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class ArchiveBuilder:
    """Accumulates named payloads and packs them into one ZIP byte stream."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self._compression = compression
        self._entries: List[ArchiveEntry] = []
        self._finalized = False

    def __len__(self) -> int:
        return len(self._entries)

    def add_entry(self, name: str, payload: bytes) -> None:
        if self._finalized:
            raise RuntimeError("Cannot add entries to a finalized archive")
        self._entries.append(ArchiveEntry(entry_name=name, payload=payload))

    def finalize(self) -> bytes:
        """
        Write all entries, in insertion order, into a ZIP archive.

        Zero entries produce a valid empty archive. The builder drops its
        payload references afterwards and cannot be reused.
        """
        if self._finalized:
            raise RuntimeError("Archive already finalized")

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self._compression) as zf:
            for entry in self._entries:
                info = zipfile.ZipInfo(entry.entry_name, date_time=ZIP_EPOCH)
                info.compress_type = self._compression
                info.external_attr = 0o644 << 16
                zf.writestr(info, entry.payload)

        self._entries = []
        self._finalized = True
        return buffer.getvalue()
