"""Forward-only character streams feeding the tokenizer.

A :class:`CharacterStream` hands out one character at a time through
``peek()`` and ``get()``. Input is pulled lazily from the underlying source
in chunks, so arbitrarily large documents never need to be held in memory.
At end of input both methods return :data:`EOF`.
"""

import codecs
import os
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Optional, Union

from push_xml_parser.shared.config import DEFAULT_BUFFER_SIZE, ParserConfig

# End-of-input sentinel. Never equal to a real character.
EOF = ""

InputType = Union[str, bytes, bytearray, "os.PathLike[str]", IO[Any], "CharacterStream"]


def _file_chunks(
    fileobj: IO[Any],
    encoding: str,
    errors: str,
    buffer_size: int
) -> Iterator[str]:
    """Yield decoded text chunks from a text or binary file object.

    Binary data goes through an incremental decoder so that a multi-byte
    sequence split across two reads decodes correctly.
    """
    decoder = None
    while True:
        data = fileobj.read(buffer_size)
        final = not data
        if isinstance(data, (bytes, bytearray)):
            if decoder is None:
                decoder = codecs.getincrementaldecoder(encoding)(errors=errors)
            text = decoder.decode(data, final=final)
        elif final and decoder is not None:
            text = decoder.decode(b"", final=True)
        else:
            text = data
        if text:
            yield text
        if final:
            return


class CharacterStream:
    """Lazily buffered, forward-only character source.

    Attributes:
        name: Human-readable name of the source, used in logs and CLI output
        chars_consumed: Number of characters returned by ``get()`` so far
    """

    def __init__(
        self,
        chunks: Iterable[str],
        name: Optional[str] = None,
        owned_file: Optional[IO[Any]] = None
    ) -> None:
        """Initialize the stream.

        Args:
            chunks: Iterable producing the text of the document in order
            name: Optional source name
            owned_file: File object closed by :meth:`close`, if the stream opened it
        """
        self._chunks = iter(chunks)
        self._buffer = ""
        self._pos = 0
        self._exhausted = False
        self._owned_file = owned_file
        self.name = name or "<stream>"
        self.chars_consumed = 0

    @classmethod
    def from_string(cls, text: str, name: Optional[str] = None) -> "CharacterStream":
        return cls((text,), name=name or "<string>")

    @classmethod
    def from_bytes(
        cls,
        data: Union[bytes, bytearray],
        encoding: str = "utf-8",
        errors: str = "strict",
        name: Optional[str] = None
    ) -> "CharacterStream":
        """Decode ``data`` eagerly; decoding errors surface here, not mid-parse."""
        return cls((bytes(data).decode(encoding, errors),), name=name or "<bytes>")

    @classmethod
    def from_file(
        cls,
        fileobj: IO[Any],
        encoding: str = "utf-8",
        errors: str = "strict",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        name: Optional[str] = None,
        close_when_done: bool = False
    ) -> "CharacterStream":
        """Stream from a text or binary file object.

        The file is only closed by :meth:`close` when ``close_when_done`` is set.
        """
        return cls(
            _file_chunks(fileobj, encoding, errors, buffer_size),
            name=name or getattr(fileobj, "name", None) or "<file>",
            owned_file=fileobj if close_when_done else None,
        )

    def _fill(self) -> bool:
        while self._pos >= len(self._buffer):
            if self._exhausted:
                return False
            chunk = next(self._chunks, None)
            if chunk is None:
                self._exhausted = True
                self._buffer = ""
                self._pos = 0
                return False
            self._buffer = chunk
            self._pos = 0
        return True

    def peek(self) -> str:
        """Return the next character without consuming it, or EOF."""
        if not self._fill():
            return EOF
        return self._buffer[self._pos]

    def get(self) -> str:
        """Consume and return the next character, or EOF."""
        if not self._fill():
            return EOF
        ch = self._buffer[self._pos]
        self._pos += 1
        self.chars_consumed += 1
        return ch

    @property
    def at_eof(self) -> bool:
        return not self._fill()

    def close(self) -> None:
        """Close the underlying file if this stream opened it."""
        if self._owned_file is not None:
            self._owned_file.close()
            self._owned_file = None

    def __enter__(self) -> "CharacterStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"CharacterStream(name={self.name!r}, consumed={self.chars_consumed})"


def open_stream(
    source: InputType,
    config: Optional[ParserConfig] = None
) -> CharacterStream:
    """Coerce any supported input into a :class:`CharacterStream`.

    A ``str`` is always treated as markup, never as a path; pass a
    :class:`pathlib.Path` to read a file. Files opened here are owned by the
    returned stream and closed by its :meth:`CharacterStream.close`.

    Raises:
        TypeError: If ``source`` is of an unsupported type
        OSError: If a path cannot be opened
    """
    stream_config = (config or ParserConfig()).stream

    if isinstance(source, CharacterStream):
        return source
    if isinstance(source, str):
        return CharacterStream.from_string(source)
    if isinstance(source, (bytes, bytearray)):
        return CharacterStream.from_bytes(
            source, stream_config.encoding, stream_config.errors
        )
    if isinstance(source, os.PathLike):
        path = Path(source)
        return CharacterStream.from_file(
            path.open("rb"),
            stream_config.encoding,
            stream_config.errors,
            stream_config.buffer_size,
            name=str(path),
            close_when_done=True,
        )
    if hasattr(source, "read"):
        return CharacterStream.from_file(
            source,
            stream_config.encoding,
            stream_config.errors,
            stream_config.buffer_size,
        )
    raise TypeError(f"Unsupported input type: {type(source).__name__}")
