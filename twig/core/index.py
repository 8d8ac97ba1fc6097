"""Index (staging area) implementation."""

import hashlib
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional

from twig.errors import CorruptIndexError

logger = logging.getLogger(__name__)

SIGNATURE = b'DIRC'
ENTRY_FORMAT = '>IIIIIIIIII20sH'
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)
UINT32_MASK = 0xFFFFFFFF


@dataclass
class IndexEntry:
    """
    Represents a single entry in the index.

    Stores metadata about a staged file including timestamps,
    permissions, and the hash of its content.
    """
    ctime: int          # Creation time (seconds)
    ctime_ns: int       # Creation time (nanoseconds)
    mtime: int          # Modification time (seconds)
    mtime_ns: int       # Modification time (nanoseconds)
    dev: int            # Device ID
    ino: int            # Inode number
    mode: int           # File mode/permissions
    uid: int            # User ID
    gid: int            # Group ID
    size: int           # File size
    sha1: str           # Blob hash of content
    flags: int          # Name length
    path: str           # Slash-separated path from the repository root

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode:o} {self.sha1[:7]} {self.path})"


class Index:
    """
    Twig index (staging area) implementation.

    The index maps each staged path to the hash of its content and
    describes the tree of the next commit. Paths are unique; iteration is
    always in path order, whatever order entries were added in.
    """

    def __init__(self):
        self.entries: Dict[str, IndexEntry] = {}
        self.version: int = 2

    def add_entry(
        self,
        path: str,
        sha1: str,
        mode: int,
        size: int,
        mtime: int = 0,
        mtime_ns: int = 0,
        ctime: int = 0,
        ctime_ns: int = 0,
        dev: int = 0,
        ino: int = 0,
        uid: int = 0,
        gid: int = 0
    ) -> None:
        """
        Add or update entry in index.

        Args:
            path: File path relative to repository root
            sha1: Blob hash of file content
            mode: File mode/permissions
            size: File size in bytes
        """
        flags = min(len(path.encode()), 0xFFF)

        self.entries[path] = IndexEntry(
            ctime=ctime & UINT32_MASK,
            ctime_ns=ctime_ns & UINT32_MASK,
            mtime=mtime & UINT32_MASK,
            mtime_ns=mtime_ns & UINT32_MASK,
            dev=dev & UINT32_MASK,
            ino=ino & UINT32_MASK,
            mode=mode & UINT32_MASK,
            uid=uid & UINT32_MASK,
            gid=gid & UINT32_MASK,
            size=size & UINT32_MASK,
            sha1=sha1,
            flags=flags,
            path=path
        )

    def add_file(self, repo, filepath) -> str:
        """
        Stage a file's current content.

        The blob is written to the object store before the entry is
        recorded, so the index never references a missing object. The
        caller persists the index with write().

        Args:
            repo: Repository instance
            filepath: Path to file (absolute, or relative to the work tree)

        Returns:
            str: Blob hash of staged content
        """
        from .objects import Blob

        work_tree = repo.require_work_tree()
        file_path = Path(filepath)

        if not file_path.is_absolute():
            file_path = work_tree / file_path

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        if not file_path.is_file():
            raise ValueError(f"Not a file: {filepath}")

        sha1 = repo.write_object(Blob.from_file(file_path))

        st = file_path.stat()
        rel_path = file_path.resolve().relative_to(work_tree).as_posix()

        self.add_entry(
            path=rel_path,
            sha1=sha1,
            mode=st.st_mode,
            size=st.st_size,
            mtime=int(st.st_mtime),
            mtime_ns=st.st_mtime_ns % 1_000_000_000,
            ctime=int(st.st_ctime),
            ctime_ns=st.st_ctime_ns % 1_000_000_000,
            dev=st.st_dev,
            ino=st.st_ino,
            uid=st.st_uid,
            gid=st.st_gid
        )
        logger.debug("Staged %s as %s", rel_path, sha1)

        return sha1

    def remove_entry(self, path: str) -> bool:
        """
        Remove entry from index.

        Returns:
            True if an entry was removed
        """
        if path in self.entries:
            del self.entries[path]
            return True
        return False

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        return self.entries.get(path)

    def contains(self, path: str) -> bool:
        return path in self.entries

    def iter_entries(self) -> Iterator[IndexEntry]:
        """Entries in path order."""
        for path in sorted(self.entries):
            yield self.entries[path]

    def hashes(self) -> Dict[str, str]:
        """Mapping of staged path to content hash, in path order."""
        return {entry.path: entry.sha1 for entry in self.iter_entries()}

    def write(self, index_path) -> None:
        """
        Write index to disk in binary format.

        Format:
        - Header: 'DIRC' + version (4 bytes) + entry count (4 bytes)
        - Entries: sorted by path, each with metadata + path, padded to 8 bytes
        - Checksum: SHA-1 of everything before it
        """
        content = bytearray()

        content.extend(SIGNATURE)
        content.extend(struct.pack('>I', self.version))
        content.extend(struct.pack('>I', len(self.entries)))

        for entry in self.iter_entries():
            entry_data = struct.pack(
                ENTRY_FORMAT,
                entry.ctime,
                entry.ctime_ns,
                entry.mtime,
                entry.mtime_ns,
                entry.dev,
                entry.ino,
                entry.mode,
                entry.uid,
                entry.gid,
                entry.size,
                bytes.fromhex(entry.sha1),
                entry.flags
            )
            path_bytes = entry.path.encode()

            content.extend(entry_data)
            content.extend(path_bytes)
            content.extend(b'\x00')

            entry_len = len(entry_data) + len(path_bytes) + 1
            content.extend(b'\x00' * ((8 - entry_len % 8) % 8))

        content.extend(hashlib.sha1(content).digest())

        Path(index_path).write_bytes(bytes(content))

    def read(self, index_path) -> None:
        """
        Read index from disk. A missing file reads as an empty index.

        Raises:
            CorruptIndexError: On a bad checksum or signature
        """
        self.entries.clear()

        if not Path(index_path).exists():
            return

        data = Path(index_path).read_bytes()

        content = data[:-20]
        if hashlib.sha1(content).digest() != data[-20:]:
            raise CorruptIndexError("Index checksum mismatch")

        signature = data[0:4]
        if signature != SIGNATURE:
            raise CorruptIndexError(f"Invalid index signature: {signature!r}")

        self.version = struct.unpack('>I', data[4:8])[0]
        entry_count = struct.unpack('>I', data[8:12])[0]

        offset = 12
        for _ in range(entry_count):
            fields = struct.unpack(ENTRY_FORMAT, data[offset:offset + ENTRY_SIZE])
            offset += ENTRY_SIZE

            path_end = data.index(b'\x00', offset)
            path = data[offset:path_end].decode()
            offset = path_end + 1

            entry_len = ENTRY_SIZE + len(path.encode()) + 1
            offset += (8 - entry_len % 8) % 8

            self.entries[path] = IndexEntry(
                ctime=fields[0],
                ctime_ns=fields[1],
                mtime=fields[2],
                mtime_ns=fields[3],
                dev=fields[4],
                ino=fields[5],
                mode=fields[6],
                uid=fields[7],
                gid=fields[8],
                size=fields[9],
                sha1=fields[10].hex(),
                flags=fields[11],
                path=path
            )

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
