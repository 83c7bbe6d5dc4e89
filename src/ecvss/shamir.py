"""Shamir secret sharing over a group's scalar field.

Information-theoretically secure threshold sharing: the secret is f(0) of
a random degree-(t-1) polynomial, shares are f(1), ..., f(n), and any t
shares give f(0) back by Lagrange interpolation. Fewer than t shares are
consistent with every possible secret.
"""

import logging

from ecvss.errors import (
    DegenerateShareSet, DuplicateShareIndex, FieldElementOutOfRange,
    FieldMismatch, InsufficientShares, InvalidThreshold, NotInvertible,
)
from ecvss.field import FieldElement, InterpolatingPoly, PrimeField, lagrange_interpolate
from ecvss.group import get_group
from ecvss.polynomial import Polynomial, generate

log = logging.getLogger(__name__)


def resolve_field(secret, field: PrimeField = None) -> PrimeField:
    if field is not None:
        return field
    if isinstance(secret, FieldElement):
        return secret.field
    return get_group().field


def check_parameters(threshold: int, share_count: int, field: PrimeField):
    """Validate (t, n) for a sharing over field.

    Raises InvalidThreshold unless 1 <= t <= n, and FieldElementOutOfRange
    when n indices 1..n do not fit in the field as distinct nonzero values.
    """
    for name, v in (("threshold", threshold), ("share_count", share_count)):
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidThreshold(f"{name} must be an int, got {v!r}")
    if threshold < 1:
        raise InvalidThreshold(f"Threshold must be >= 1, got {threshold}")
    if threshold > share_count:
        raise InvalidThreshold(
            f"Threshold exceeds share count: threshold={threshold}, share_count={share_count}"
        )
    if share_count >= field.order:
        raise FieldElementOutOfRange(
            f"share_count {share_count} leaves no room for distinct nonzero indices"
        )


def evaluate_shares(poly: Polynomial, share_count: int) -> list:
    """Evaluate poly at x = 1, 2, ..., share_count."""
    return poly.get_shares(range(1, share_count + 1))


def split(secret, threshold: int, share_count: int, field: PrimeField = None, rng=None) -> list:
    """Split a secret into share_count shares with the given threshold.

    Args:
        secret: FieldElement, or int in [0, order).
        threshold: Minimum shares needed to reconstruct (t).
        share_count: Total number of shares to generate (n).
        field: Scalar field; defaults to the default group's field.
        rng: Optional random.Random instance for deterministic tests.

    Returns:
        List of Share(i, f(i)) for i in 1..n, f a random degree-(t-1)
        polynomial with f(0) = secret.
    """
    field = resolve_field(secret, field)
    check_parameters(threshold, share_count, field)

    poly = generate(secret, threshold, field, rng)
    shares = evaluate_shares(poly, share_count)
    log.debug("Shamir split: %d shares, threshold %d", share_count, threshold)
    return shares


def _points(shares, threshold: int = None) -> list:
    """Validate a share set and turn it into (x, y) field points."""
    shares = list(shares)
    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
            raise InvalidThreshold(f"Threshold must be an int >= 1, got {threshold!r}")
        required = threshold
    else:
        required = 2
    if len(shares) < required:
        raise InsufficientShares(f"Need at least {required} shares, got {len(shares)}")

    field = shares[0].value.field
    seen = set()
    points = []
    for share in shares:
        if share.value.field != field:
            raise FieldMismatch("Shares belong to different fields")
        if share.index in seen:
            raise DuplicateShareIndex(f"Share index {share.index} supplied more than once")
        if share.index >= field.order:
            raise FieldElementOutOfRange(f"Share index {share.index} is outside the field")
        seen.add(share.index)
        points.append((field(share.index), share.value))
    return points


def _interpolate(points: list, target) -> FieldElement:
    try:
        return lagrange_interpolate(points, target)
    except NotInvertible as e:
        raise DegenerateShareSet("Interpolation denominator is zero") from e


def reconstruct(shares, threshold: int = None) -> FieldElement:
    """Reconstruct the secret from t or more shares.

    Args:
        shares: Iterable of Share.
        threshold: The sharing threshold, if known. Without it at least
            two shares are required.

    Returns:
        The secret f(0) via Lagrange interpolation at x=0. Every supplied
        share takes part; the result does not depend on their order.
    """
    points = _points(shares, threshold)
    log.debug("Shamir reconstruct from %d shares", len(points))
    return _interpolate(points, 0)


def reconstruct_at(shares, target, threshold: int = None) -> FieldElement:
    """Reconstruct the polynomial value f(target) instead of f(0)."""
    points = _points(shares, threshold)
    return _interpolate(points, target)


def is_consistent(shares, threshold: int) -> bool:
    """True when all shares lie on one polynomial of degree threshold - 1.

    Build the Newton form from the first t shares (O(t^2) once), then check
    each remaining share in O(t). With exactly t shares there is nothing to
    cross-check and the answer is True.
    """
    points = _points(shares, threshold)
    if len(points) <= threshold:
        return True
    poly = InterpolatingPoly(points[:threshold])
    return all(poly.eval_at(x) == y for x, y in points[threshold:])


def consistency_check(shares, threshold: int) -> list:
    """Detect corrupt shares by checking polynomial consistency.

    Given more than t shares that should lie on a degree-(t-1) polynomial,
    uses leave-one-out interpolation to flag inconsistent shares. Every
    corrupted share is flagged; an honest share may be flagged as well when
    its reference set contains a corrupted one.

    Returns:
        Positions (into shares) of the flagged shares; empty when there is
        no redundancy to check against.
    """
    points = _points(shares, threshold)
    n = len(points)
    if n <= threshold:
        return []

    corrupt = []
    for i in range(n):
        # Pick t shares excluding i
        others = [p for j, p in enumerate(points) if j != i][:threshold]
        expected = _interpolate(others, points[i][0])
        if expected != points[i][1]:
            corrupt.append(i)

    if corrupt:
        log.info("Consistency check flagged %d of %d shares", len(corrupt), n)
    return corrupt
