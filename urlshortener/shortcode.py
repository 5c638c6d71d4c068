"""Short code generation utilities."""

import os
from typing import Callable, Optional


# Letters without the easily confused I, O and l, plus digits 2-9
ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"
DEFAULT_LENGTH = 7


class GenerationError(Exception):
    """Raised when the random source cannot produce bytes."""

    pass


class ShortCodeGenerator:
    """Generate random short codes from a fixed alphabet.

    Bytes come from the operating system CSPRNG. A byte is only used when it
    falls below the largest multiple of the alphabet size that fits in 256;
    anything above is discarded and redrawn, so every symbol is equally
    likely.
    """

    def __init__(
        self,
        alphabet: str = ALPHABET,
        default_length: int = DEFAULT_LENGTH,
        random_bytes: Optional[Callable[[int], bytes]] = None,
    ):
        """Initialize short code generator.

        Args:
            alphabet: Symbols codes are drawn from (1-256 unique characters)
            default_length: Default length for generated codes
            random_bytes: Source of random bytes (defaults to os.urandom)
        """
        if not alphabet or len(alphabet) > 256:
            raise ValueError(f"Alphabet must contain 1-256 symbols (given: {len(alphabet)})")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Alphabet must not contain duplicate symbols")
        if default_length <= 0:
            raise ValueError(f"Default length must be positive (given: {default_length})")

        self.alphabet = alphabet
        self.default_length = default_length
        self._random_bytes = random_bytes or os.urandom
        # Bytes at or above this value would bias the distribution
        self._threshold = 256 - (256 % len(alphabet))

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code of exactly ``length`` characters

        Raises:
            GenerationError: If the random source is unavailable
        """
        length = self.default_length if length is None else length
        if length <= 0:
            raise ValueError(f"Length must be positive (given: {length})")

        base = len(self.alphabet)
        out = []
        while len(out) < length:
            for byte in self._read(length - len(out)):
                if byte < self._threshold:
                    out.append(self.alphabet[byte % base])
                    if len(out) == length:
                        break

        return "".join(out)

    def _read(self, n: int) -> bytes:
        try:
            data = self._random_bytes(n)
        except (NotImplementedError, OSError) as e:
            raise GenerationError(f"random source unavailable: {e}") from e

        if len(data) != n:
            raise GenerationError(f"random source returned {len(data)} of {n} bytes")
        return data
