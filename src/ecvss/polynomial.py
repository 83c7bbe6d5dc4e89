"""Sharing polynomials and coefficient commitments.

A sharing polynomial f has exactly t coefficients (degree t - 1) with the
secret as f(0). Shares are evaluations f(1), ..., f(n). Commitments publish
one group element per coefficient so that anyone can evaluate f "in the
exponent" and check a share without learning the coefficients.
"""

import logging

from ecvss.errors import FieldMismatch, InvalidThreshold, ThresholdMismatch
from ecvss.field import FieldElement, PrimeField, poly_eval_low
from ecvss.group import Group, get_group
from ecvss.share import Share

log = logging.getLogger(__name__)


class Polynomial:
    """f(x) = a_0 + a_1 x + ... + a_{t-1} x^{t-1} over a prime field.

    The length is the threshold and never shrinks: a zero leading
    coefficient still counts. The dealer should drop the polynomial as soon
    as shares and commitments are out.
    """

    __slots__ = ('coeffs',)

    def __init__(self, coeffs):
        coeffs = tuple(coeffs)
        if not coeffs:
            raise InvalidThreshold("Polynomial needs at least one coefficient")
        for c in coeffs:
            if not isinstance(c, FieldElement):
                raise TypeError(f"Coefficients must be FieldElements, got {type(c).__name__}")
        if any(c.field != coeffs[0].field for c in coeffs):
            raise FieldMismatch("Coefficients belong to different fields")
        # coeffs[0] = a_0 (secret), coeffs[t-1] = a_{t-1}
        self.coeffs = coeffs

    @property
    def field(self) -> PrimeField:
        return self.coeffs[0].field

    @property
    def threshold(self) -> int:
        return len(self.coeffs)

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1

    @property
    def secret(self) -> FieldElement:
        """The constant term f(0)."""
        return self.coeffs[0]

    def evaluate(self, x) -> FieldElement:
        return poly_eval_low(self.coeffs, self.field(x))

    def get_share(self, index: int) -> Share:
        """Return Share(index, f(index))."""
        return Share(index, self.evaluate(index))

    def get_shares(self, indices) -> list:
        return [self.get_share(i) for i in indices]

    def __len__(self):
        return len(self.coeffs)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    __hash__ = None

    def __repr__(self):
        # Never print coefficients: coeffs[0] is the secret.
        return f"Polynomial(threshold={self.threshold})"


class Commitment:
    """Public group elements C_0, ..., C_{t-1}, one per coefficient.

    Feldman: C_j = g*a_j. Pedersen: C_j = g*a_j + h*b_j.
    Immutable once published; verifying many shares against one commitment
    needs no coordination.
    """

    __slots__ = ('points', 'group')

    def __init__(self, points, group: Group):
        self.points = tuple(points)
        self.group = group

    @property
    def threshold(self) -> int:
        return len(self.points)

    def evaluate_at(self, x):
        """sum_j C_j * x^j, by Horner's method in the exponent."""
        x = self.group.field(x)
        acc = self.points[-1]
        for c in reversed(self.points[:-1]):
            acc = self.group.add(self.group.scalar_mul(acc, x), c)
        return acc

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, i):
        return self.points[i]

    def __eq__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return self.group.order == other.group.order and self.points == other.points

    def __hash__(self):
        return hash(self.points)

    def __repr__(self):
        return f"Commitment({self.group.name}, threshold={self.threshold})"


def generate(secret, threshold: int, field: PrimeField = None, rng=None) -> Polynomial:
    """Random polynomial with `threshold` coefficients and f(0) = secret.

    Args:
        secret: FieldElement, or an int in [0, order).
        threshold: Number of coefficients t (degree t - 1), at least 1.
        field: Scalar field; defaults to the secret's field, else the
            default group's field.
        rng: Optional random.Random instance for deterministic tests.
            None draws coefficients from the secrets module.
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
        raise InvalidThreshold(f"Threshold must be an int >= 1, got {threshold!r}")
    if field is None:
        field = secret.field if isinstance(secret, FieldElement) else get_group().field
    secret = field.element(secret)

    coeffs = [secret] + [field.random_element(rng) for _ in range(threshold - 1)]
    return Polynomial(coeffs)


def evaluate(poly: Polynomial, x) -> FieldElement:
    """f(x) via Horner's method, O(t) field operations."""
    return poly.evaluate(x)


def _check_field(poly: Polynomial, group: Group):
    if poly.field != group.field:
        raise FieldMismatch(f"Polynomial field does not match the {group.name} scalar field")


def commit_feldman(poly: Polynomial, group: Group = None, generator=None) -> Commitment:
    """C_j = g*a_j for every coefficient, in order."""
    group = group if group is not None else get_group()
    _check_field(poly, group)
    g = group.generator if generator is None else generator

    points = [group.scalar_mul(g, c) for c in poly.coeffs]
    log.debug("Feldman commitment over %s: %d coefficients", group.name, len(points))
    return Commitment(points, group)


def commit_pedersen(poly: Polynomial, blinding: Polynomial, group: Group = None,
                    g=None, h=None) -> Commitment:
    """C_j = g*a_j + h*b_j for value coefficients a_j and blinding b_j."""
    if len(poly) != len(blinding):
        raise ThresholdMismatch(
            f"Value polynomial has {len(poly)} coefficients, blinding has {len(blinding)}"
        )
    group = group if group is not None else get_group()
    _check_field(poly, group)
    _check_field(blinding, group)
    g = group.generator if g is None else g
    h = group.h if h is None else h

    points = [
        group.add(group.scalar_mul(g, a), group.scalar_mul(h, b))
        for a, b in zip(poly.coeffs, blinding.coeffs)
    ]
    log.debug("Pedersen commitment over %s: %d coefficients", group.name, len(points))
    return Commitment(points, group)
