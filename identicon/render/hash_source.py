"""
Hash byte source.

The profile hash is the only pseudo-random feed for the renderer. Characters
are read as their code points; every read wraps around the hash length.
"""


class HashCursor:
    """Wrapping index into a hash string.

    ``advance()`` moves first and reads second, so a cursor created at
    position 0 yields ``hash[1]`` on its first step.
    """

    def __init__(self, digest: str, position: int = 0):
        if not digest:
            raise ValueError("HashCursor needs a non-empty hash")
        self._digest = digest
        self._length = len(digest)
        self._position = position % self._length

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return self._length

    def char_at(self, index: int) -> str:
        return self._digest[index % self._length]

    def byte_at(self, index: int) -> int:
        return ord(self.char_at(index))

    def current(self) -> int:
        return self.byte_at(self._position)

    def advance(self) -> int:
        self._position += 1
        if self._position >= self._length:
            self._position = 0
        return self.current()


def is_odd_parity(value: int) -> bool:
    """True when the low 8 bits of value have an odd number of set bits."""
    bits = value & 0xFF
    count = 0
    for _ in range(8):
        count += bits & 1
        bits >>= 1
    return (count & 1) == 1
