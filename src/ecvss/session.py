"""One-shot dealing: everything a dealer hands out for one sharing.

The polynomial itself is generated, evaluated and committed inside deal()
and goes out of scope with it; a SharingSession only holds what is meant
to be distributed.
"""

from dataclasses import dataclass

from ecvss import feldman, pedersen, shamir
from ecvss.errors import InvalidShareIndex
from ecvss.group import Group, get_group
from ecvss.polynomial import Commitment

SCHEMES = ("shamir", "feldman", "pedersen")


@dataclass(frozen=True)
class SharingSession:
    """Output of one split: shares plus, for VSS, the public commitment."""

    scheme: str
    threshold: int
    share_count: int
    shares: tuple
    blinding_shares: tuple = None
    commitment: Commitment = None

    def _position(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidShareIndex(f"Participant index must be an int, got {index!r}")
        if not 1 <= index <= self.share_count:
            raise InvalidShareIndex(
                f"Participant index must be in 1..{self.share_count}, got {index}"
            )
        return index - 1

    def share_for(self, index: int):
        """The share (and blinding share, for Pedersen) of participant index."""
        pos = self._position(index)
        share = self.shares[pos]
        if self.blinding_shares is None:
            return share
        return share, self.blinding_shares[pos]

    def verify(self, index: int) -> bool:
        """Re-run share verification for participant index.

        Plain Shamir has nothing to verify against and always returns True.
        """
        pos = self._position(index)
        if self.scheme == "feldman":
            return feldman.verify_share(self.shares[pos], self.commitment)
        if self.scheme == "pedersen":
            return pedersen.verify_share(
                self.shares[pos], self.blinding_shares[pos], self.commitment
            )
        return True


def deal(secret, threshold: int, share_count: int, scheme: str = "shamir",
         group: Group = None, rng=None) -> SharingSession:
    """Split secret with the named scheme ("shamir", "feldman" or "pedersen")."""
    if scheme not in SCHEMES:
        raise ValueError(f"Unknown scheme {scheme!r}; expected one of {SCHEMES}")
    group = group if group is not None else get_group()

    if scheme == "shamir":
        shares = shamir.split(secret, threshold, share_count, group.field, rng)
        return SharingSession(scheme, threshold, share_count, tuple(shares))
    if scheme == "feldman":
        shares, commitment = feldman.split_with_commitments(
            secret, threshold, share_count, group, rng=rng
        )
        return SharingSession(scheme, threshold, share_count, tuple(shares),
                              commitment=commitment)
    shares, blinding_shares, commitment = pedersen.split_with_commitments(
        secret, threshold, share_count, group, rng=rng
    )
    return SharingSession(scheme, threshold, share_count, tuple(shares),
                          tuple(blinding_shares), commitment)
