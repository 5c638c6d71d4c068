"""Tests for short code generation."""

import pytest

from urlshortener.shortcode import ALPHABET, GenerationError, ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_default_length(self):
        """Codes default to seven characters from the alphabet."""
        generator = ShortCodeGenerator()

        for _ in range(200):
            code = generator.generate()
            assert len(code) == 7
            assert all(c in ALPHABET for c in code)

    def test_generate_custom_length(self):
        generator = ShortCodeGenerator()

        code = generator.generate(length=12)
        assert len(code) == 12
        assert all(c in ALPHABET for c in code)

    def test_alphabet_excludes_confusable_glyphs(self):
        for glyph in "IOl01":
            assert glyph not in ALPHABET
        assert len(set(ALPHABET)) == len(ALPHABET)

    def test_biased_bytes_are_redrawn(self):
        """Bytes at or above 256 - 256 % len(alphabet) are discarded."""
        threshold = 256 - (256 % len(ALPHABET))
        # Two rejected bytes, then indexes 0, 1, 2
        chunks = [bytes([threshold, 255, 0]), bytes([1, 2])]
        requested = []

        def random_bytes(n):
            requested.append(n)
            return chunks.pop(0)

        generator = ShortCodeGenerator(random_bytes=random_bytes)
        code = generator.generate(length=3)

        assert code == ALPHABET[0] + ALPHABET[1] + ALPHABET[2]
        assert requested == [3, 2]

    def test_byte_maps_modulo_alphabet(self):
        generator = ShortCodeGenerator(random_bytes=lambda n: bytes([len(ALPHABET) + 5] * n))

        assert generator.generate(length=4) == ALPHABET[5] * 4

    def test_unavailable_random_source(self):
        def broken(n):
            raise NotImplementedError("no entropy")

        generator = ShortCodeGenerator(random_bytes=broken)

        with pytest.raises(GenerationError, match="random source unavailable"):
            generator.generate()

    def test_short_read_is_an_error(self):
        generator = ShortCodeGenerator(random_bytes=lambda n: b"")

        with pytest.raises(GenerationError):
            generator.generate()

    @pytest.mark.parametrize("length", [0, -3])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError):
            ShortCodeGenerator().generate(length=length)

    def test_invalid_alphabet(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(alphabet="")
        with pytest.raises(ValueError):
            ShortCodeGenerator(alphabet="aab")
