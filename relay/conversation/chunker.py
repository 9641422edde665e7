"""Split replies into transport-sized messages on word boundaries."""

from collections.abc import Iterator

DEFAULT_MAX_CHUNK_SIZE = 1600


def _last_whitespace(text: str, start: int, end: int) -> int:
    """Index of the last whitespace in text[start + 1:end], or -1."""
    for index in range(end - 1, start, -1):
        if text[index].isspace():
            return index
    return -1


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def split_message(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> Iterator[str]:
    """Yield trimmed, non-empty chunks of at most `max_chunk_size` characters.

    A cut that would land inside a word moves back to the last whitespace
    in the chunk. A word longer than `max_chunk_size` is cut hard so the
    walk always advances.

    Raises:
        ValueError: If max_chunk_size is not positive
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    length = len(text)
    start = _skip_whitespace(text, 0)

    while start < length:
        end = min(start + max_chunk_size, length)
        if end < length and not text[end].isspace():
            cut = _last_whitespace(text, start, end)
            if cut != -1:
                end = cut

        chunk = text[start:end].strip()
        if chunk:
            yield chunk

        start = _skip_whitespace(text, end)


class MessageChunker:
    """Reusable splitter bound to a channel's message size limit."""

    def __init__(self, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> None:
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        self._max_chunk_size = max_chunk_size

    @property
    def max_chunk_size(self) -> int:
        return self._max_chunk_size

    def split(self, text: str) -> Iterator[str]:
        """Lazily split `text`; each call starts a fresh walk."""
        return split_message(text, self._max_chunk_size)
