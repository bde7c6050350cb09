"""
Checksums required by the Glacier API.

Glacier verifies archives with a SHA-256 tree hash: the data is split into
1 MiB leaves, each leaf is hashed and the digests are combined pairwise
until a single root remains.
"""
import io

from botocore.utils import calculate_sha256, calculate_tree_hash


class TreeHashCalculator:
    """Computes tree hashes and linear payload hashes over byte buffers."""

    def compute(self, data: bytes) -> str:
        """
        Compute the tree hash of data.

        Args:
            data: Bytes to hash

        Returns:
            Hex encoded tree hash
        """
        return calculate_tree_hash(io.BytesIO(data))

    def linear(self, data: bytes) -> str:
        """Hex encoded SHA-256 of data (x-amz-content-sha256)."""
        return calculate_sha256(io.BytesIO(data), as_hex=True)
