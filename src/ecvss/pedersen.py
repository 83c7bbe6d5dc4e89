"""Pedersen verifiable secret sharing.

The dealer picks a second, independent random polynomial r (the blinding
polynomial) of the same threshold and publishes C_j = g*a_j + h*b_j.
Participant i receives (f(i), r(i)) and checks

    g*f(i) + h*r(i) == sum_j C_j * i^j

The commitment is information-theoretically hiding: for every candidate
secret there is a blinding polynomial producing the same C. Binding holds
as long as log_g(h) is unknown, which is why h is hashed onto the group
rather than derived from g.
"""

import logging
from itertools import zip_longest

from ecvss.group import Group, get_group
from ecvss.polynomial import Commitment, commit_pedersen, generate
from ecvss.share import Share
from ecvss.shamir import check_parameters, evaluate_shares

log = logging.getLogger(__name__)


def split_with_commitments(secret, threshold: int, share_count: int, group: Group = None,
                           g=None, h=None, rng=None) -> tuple:
    """Share secret with a fresh blinding polynomial and commit to both.

    Returns:
        (shares, blinding_shares, commitment): value shares and blinding
        shares at the same indices 1..n, and the Pedersen commitment.
        Participant i gets shares[i-1] and blinding_shares[i-1].
    """
    group = group if group is not None else get_group()
    field = group.field
    check_parameters(threshold, share_count, field)

    poly = generate(secret, threshold, field, rng)
    blinding = generate(field.random_element(rng), threshold, field, rng)
    commitment = commit_pedersen(poly, blinding, group, g, h)

    shares = evaluate_shares(poly, share_count)
    blinding_shares = evaluate_shares(blinding, share_count)
    log.debug("Pedersen split over %s: %d shares, threshold %d",
              group.name, share_count, threshold)
    return shares, blinding_shares, commitment


def verify_share(share: Share, blinding_share: Share, commitment: Commitment,
                 g=None, h=None) -> bool:
    """Check a (share, blinding share) pair against a Pedersen commitment.

    False when the pair is off the committed polynomials, or when the two
    shares carry different indices. Never raises on a mismatch.
    """
    if len(commitment) == 0 or share.index != blinding_share.index:
        return False
    group = commitment.group
    g = group.generator if g is None else g
    h = group.h if h is None else h

    actual = group.add(group.scalar_mul(g, share.value),
                       group.scalar_mul(h, blinding_share.value))
    ok = actual == commitment.evaluate_at(share.index)
    if not ok:
        log.info("Share %d does not match the Pedersen commitment", share.index)
    return ok


def verify_shares(shares, blinding_shares, commitment: Commitment, g=None, h=None) -> list:
    """Indices of the (share, blinding share) pairs that fail verify_share.

    A share or blinding share without a partner at the same position
    cannot be checked and is reported as failed.
    """
    bad = []
    for s, b in zip_longest(shares, blinding_shares):
        if s is None or b is None:
            bad.append((s if s is not None else b).index)
        elif not verify_share(s, b, commitment, g, h):
            bad.append(s.index)
    return bad
