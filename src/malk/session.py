"""Edit session: one retained save buffer plus its last-good field set.

The presentation layer (here the CLI tools) does the file I/O, hands the
bytes to decode(), edits the returned SaveFields, and persists whatever
encode() returns.
"""

import copy

from .codec import SaveFields, NoBufferLoadedError, decode_fields, encode_fields


class SaveSession:
    """Holds the original save bytes for the length of an edit session.

    A failed decode leaves the session exactly as it was. A failed encode
    leaves the retained buffer unchanged.
    """

    def __init__(self):
        self._buffer: bytearray | None = None
        self._fields: SaveFields | None = None

    @property
    def is_loaded(self) -> bool:
        return self._buffer is not None

    @property
    def buffer(self) -> bytes | None:
        """Copy of the retained buffer, or None when nothing is loaded."""
        return None if self._buffer is None else bytes(self._buffer)

    def decode(self, data) -> SaveFields:
        buf = bytearray(data)
        fields = decode_fields(buf)
        self._buffer = buf
        self._fields = fields
        return copy.copy(fields)

    def encode(self, fields: SaveFields | None = None) -> bytes:
        """Write fields (default: the current ones) into the retained buffer.

        Returns the full updated file contents.
        """
        if self._buffer is None:
            raise NoBufferLoadedError()
        if fields is None:
            fields = self._fields
        work = bytearray(self._buffer)
        encode_fields(fields, work)
        self._buffer = work
        self._fields = copy.copy(fields)
        return bytes(work)

    def current_fields(self) -> SaveFields | None:
        return None if self._fields is None else copy.copy(self._fields)
