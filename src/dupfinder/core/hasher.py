"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content fingerprinting using pluggable hash algorithms.

HasherImpl streams a file through the selected algorithm in fixed-size chunks,
so memory use does not depend on file size. Open/read errors propagate as
OSError; the caller decides whether to drop the file.
"""

import hashlib
from typing import Dict, Union

import xxhash

from dupfinder.core.interfaces import Hasher, HashAlgorithm, HashAccumulator
from dupfinder.core.models import HashAlgorithmName, DEFAULT_CHUNK_SIZE


class SHA256AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.SHA256.value

    def new(self) -> HashAccumulator:
        return hashlib.sha256()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.XXH64.value

    def new(self) -> HashAccumulator:
        return xxhash.xxh64()


_ALGORITHMS: Dict[HashAlgorithmName, type] = {
    HashAlgorithmName.SHA256: SHA256AlgorithmImpl,
    HashAlgorithmName.XXH64: XXHashAlgorithmImpl,
}


def get_algorithm(name: Union[str, HashAlgorithmName]) -> HashAlgorithm:
    """Returns an algorithm instance by enum or name ('sha256', 'xxh64')."""
    if isinstance(name, str):
        try:
            name = HashAlgorithmName(name.lower())
        except ValueError:
            raise ValueError(
                f"Unknown hash algorithm: '{name}'. "
                f"Supported: {', '.join(a.value for a in HashAlgorithmName)}"
            ) from None
    return _ALGORITHMS[name]()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Holds no per-file state, so one instance can be shared by all workers.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("Chunk size must be at least 1 byte")
        self.algorithm = algorithm or SHA256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, path: str) -> str:
        """
        Computes the hex digest of the entire file content.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        accumulator = self.algorithm.new()
        with open(path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                accumulator.update(chunk)
        return accumulator.hexdigest()

    def __repr__(self):
        return f"<HasherImpl algorithm={self.algorithm.name}, chunk_size={self.chunk_size}>"


def hash_file(path: str, algorithm: Union[str, HashAlgorithmName] = HashAlgorithmName.SHA256,
              chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Convenience wrapper: fingerprint a single file."""
    return HasherImpl(get_algorithm(algorithm), chunk_size).compute_digest(path)
