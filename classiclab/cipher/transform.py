"""Byte-streaming encrypt/decrypt contract and its combinators.

A cipher is fed one input byte at a time and answers with the output bytes
that byte completes (possibly none). ``*_finish`` is called exactly once
after the last byte to flush any partial block.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional


class CipherError(Exception):
    """Stream-time failure: illegal input byte or an incomplete final block."""

    def __init__(self, message: str = "Cipher error!"):
        super().__init__(message)


class KeyConstructionError(ValueError):
    """Raised once, when a cipher cannot be built from the given key material."""


def is_ascii_letter(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


class _Combinable:
    """Fluent builders shared by every encryptor and decryptor."""

    def chain(self, other) -> "Chain":
        return Chain(self, other)

    def invert(self) -> "Invert":
        return Invert(self)

    def map(self, f: Callable[[int], int]) -> "Map":
        return Map(self, f)

    def filter(self, predicate: Callable[[int], bool]) -> "Filter":
        return Filter(self, predicate)

    def filter_map(self, f: Callable[[int], Optional[int]]) -> "FilterMap":
        return FilterMap(self, f)


class Encryptor(_Combinable):
    def encrypt_byte(self, byte: int) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def encrypt_finish(self) -> bytes:  # pragma: no cover
        raise NotImplementedError


class Decryptor(_Combinable):
    def decrypt_byte(self, byte: int) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def decrypt_finish(self) -> bytes:  # pragma: no cover
        raise NotImplementedError


class Chain(Encryptor, Decryptor):
    """Pipe every output byte of ``first`` into ``second``.

    If either stage raises, nothing produced during that call is returned.
    """

    def __init__(self, first, second):
        self.first = first
        self.second = second

    def encrypt_byte(self, byte: int) -> bytes:
        out = bytearray()
        for b in self.first.encrypt_byte(byte):
            out += self.second.encrypt_byte(b)
        return bytes(out)

    def encrypt_finish(self) -> bytes:
        out = bytearray()
        for b in self.first.encrypt_finish():
            out += self.second.encrypt_byte(b)
        out += self.second.encrypt_finish()
        return bytes(out)

    def decrypt_byte(self, byte: int) -> bytes:
        out = bytearray()
        for b in self.first.decrypt_byte(byte):
            out += self.second.decrypt_byte(b)
        return bytes(out)

    def decrypt_finish(self) -> bytes:
        out = bytearray()
        for b in self.first.decrypt_finish():
            out += self.second.decrypt_byte(b)
        out += self.second.decrypt_finish()
        return bytes(out)


class Invert(Encryptor, Decryptor):
    """Swap the roles of the wrapped cipher."""

    def __init__(self, inner):
        self.inner = inner

    def encrypt_byte(self, byte: int) -> bytes:
        return self.inner.decrypt_byte(byte)

    def encrypt_finish(self) -> bytes:
        return self.inner.decrypt_finish()

    def decrypt_byte(self, byte: int) -> bytes:
        return self.inner.encrypt_byte(byte)

    def decrypt_finish(self) -> bytes:
        return self.inner.encrypt_finish()


class Map(Encryptor, Decryptor):
    def __init__(self, inner, f: Callable[[int], int]):
        self.inner = inner
        self.f = f

    def encrypt_byte(self, byte: int) -> bytes:
        return self.inner.encrypt_byte(self.f(byte))

    def encrypt_finish(self) -> bytes:
        return self.inner.encrypt_finish()

    def decrypt_byte(self, byte: int) -> bytes:
        return self.inner.decrypt_byte(self.f(byte))

    def decrypt_finish(self) -> bytes:
        return self.inner.decrypt_finish()


class Filter(Encryptor, Decryptor):
    """Drop input bytes that fail ``predicate`` before they reach ``inner``."""

    def __init__(self, inner, predicate: Callable[[int], bool]):
        self.inner = inner
        self.predicate = predicate

    def encrypt_byte(self, byte: int) -> bytes:
        if self.predicate(byte):
            return self.inner.encrypt_byte(byte)
        return b""

    def encrypt_finish(self) -> bytes:
        return self.inner.encrypt_finish()

    def decrypt_byte(self, byte: int) -> bytes:
        if self.predicate(byte):
            return self.inner.decrypt_byte(byte)
        return b""

    def decrypt_finish(self) -> bytes:
        return self.inner.decrypt_finish()


class FilterMap(Encryptor, Decryptor):
    def __init__(self, inner, f: Callable[[int], Optional[int]]):
        self.inner = inner
        self.f = f

    def encrypt_byte(self, byte: int) -> bytes:
        mapped = self.f(byte)
        if mapped is None:
            return b""
        return self.inner.encrypt_byte(mapped)

    def encrypt_finish(self) -> bytes:
        return self.inner.encrypt_finish()

    def decrypt_byte(self, byte: int) -> bytes:
        mapped = self.f(byte)
        if mapped is None:
            return b""
        return self.inner.decrypt_byte(mapped)

    def decrypt_finish(self) -> bytes:
        return self.inner.decrypt_finish()


def encrypt_all(cipher: Encryptor, data: Iterable[int]) -> bytes:
    """Feed every byte of ``data`` and then finish; raises the first ``CipherError``."""
    out = bytearray()
    for b in data:
        out += cipher.encrypt_byte(b)
    out += cipher.encrypt_finish()
    return bytes(out)


def decrypt_all(cipher: Decryptor, data: Iterable[int]) -> bytes:
    out = bytearray()
    for b in data:
        out += cipher.decrypt_byte(b)
    out += cipher.decrypt_finish()
    return bytes(out)
