"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Full-content file hashing with a pluggable algorithm.

Hash equality is the final proof of duplication (there is no byte-by-byte
comparison afterwards), so the default algorithm is SHA-256.
"""

import hashlib
import logging

from find_duplicates.core.models import FileInfo
from find_duplicates.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 1024 * 1024


# Use the same way to plug in any other collision-resistant algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new():
        return hashlib.sha256()


class HasherImpl(Hasher):
    """
    Streams whole files through the configured algorithm.
    Only one file is open at a time; zero-byte files are never opened.
    """

    def __init__(self, algorithm: HashAlgorithm = None, block_size: int = DEFAULT_BLOCK_SIZE):
        if block_size <= 0:
            raise ValueError("Block size must be positive")
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.block_size = block_size
        self.empty_hash: bytes = self.algorithm.new().digest()

    def compute_full_hash(self, file: FileInfo) -> bytes:
        """
        Digest of the whole file content.
        Raises OSError if the file cannot be opened or read.
        """
        if file.size == 0:
            return self.empty_hash

        digest = self.algorithm.new()
        with open(file.path, 'rb') as f:
            for block in iter(lambda: f.read(self.block_size), b''):
                digest.update(block)
        logger.debug(f"Hashed {file.path} ({file.size} bytes)")
        return digest.digest()
