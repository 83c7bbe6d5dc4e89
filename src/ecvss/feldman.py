"""Feldman verifiable secret sharing.

Shamir sharing plus a public commitment C_j = g*a_j to every coefficient.
A participant holding share (i, y) checks

    g*y == sum_j C_j * i^j

i.e. evaluates the committed polynomial in the exponent. Binding is
perfect (a wrong share never matches); hiding is only computational,
since C_0 = g*secret is public.
"""

import logging

from ecvss.group import Group, get_group
from ecvss.polynomial import Commitment, commit_feldman, generate
from ecvss.share import Share
from ecvss.shamir import check_parameters, evaluate_shares

log = logging.getLogger(__name__)


def split_with_commitments(secret, threshold: int, share_count: int, group: Group = None,
                           generator=None, rng=None) -> tuple:
    """Shamir-split secret over group's scalar field and commit to the polynomial.

    Returns:
        (shares, commitment): shares at indices 1..n and the Feldman
        commitment with one group element per coefficient.
    """
    group = group if group is not None else get_group()
    check_parameters(threshold, share_count, group.field)

    poly = generate(secret, threshold, group.field, rng)
    commitment = commit_feldman(poly, group, generator)
    shares = evaluate_shares(poly, share_count)
    log.debug("Feldman split over %s: %d shares, threshold %d",
              group.name, share_count, threshold)
    return shares, commitment


def verify_share(share: Share, commitment: Commitment, generator=None) -> bool:
    """Check a share against a Feldman commitment.

    Returns False for any share off the committed polynomial; never raises
    on a mismatch. False means reject the share, not retry.
    """
    if len(commitment) == 0:
        return False
    group = commitment.group
    g = group.generator if generator is None else generator

    expected = commitment.evaluate_at(share.index)
    ok = group.scalar_mul(g, share.value) == expected
    if not ok:
        log.info("Share %d does not match the Feldman commitment", share.index)
    return ok


def verify_shares(shares, commitment: Commitment, generator=None) -> list:
    """Indices of the shares that fail verify_share."""
    return [s.index for s in shares if not verify_share(s, commitment, generator)]


def public_key(commitment: Commitment):
    """C_0 = g*secret: the public counterpart of the shared secret."""
    return commitment[0]
