"""Prime field arithmetic: the scalar field of a commitment group.

Secrets, coefficients, shares and Lagrange weights all live in GF(q), q the
prime order of the group used for commitments. Raw Python ints are wrapped
in FieldElement so that every result stays reduced mod q and elements of
different fields cannot be mixed by accident.
"""

import operator
import secrets

from ecvss.errors import FieldElementOutOfRange, FieldMismatch, NotInvertible


def _as_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a field value")
    return operator.index(value)


class PrimeField:
    """GF(order) for a prime order.

    field(v) reduces any integer into the field; field.element(v) is the
    strict constructor and rejects values outside [0, order).
    """

    __slots__ = ('order', 'bits')

    def __init__(self, order: int):
        order = _as_int(order)
        if order < 2:
            raise ValueError(f"Field order must be a prime >= 2, got {order}")
        self.order = order
        self.bits = order.bit_length()

    def __call__(self, value) -> 'FieldElement':
        if isinstance(value, FieldElement):
            return self._own(value)
        return FieldElement(_as_int(value) % self.order, self)

    def element(self, value) -> 'FieldElement':
        if isinstance(value, FieldElement):
            return self._own(value)
        v = _as_int(value)
        if not 0 <= v < self.order:
            raise FieldElementOutOfRange(
                f"Value must be in [0, {self.order}), got {v}"
            )
        return FieldElement(v, self)

    def _own(self, elem: 'FieldElement') -> 'FieldElement':
        if elem.field != self:
            raise FieldMismatch("Element belongs to a different field")
        return elem

    @property
    def zero(self) -> 'FieldElement':
        return FieldElement(0, self)

    @property
    def one(self) -> 'FieldElement':
        return FieldElement(1, self)

    def random_element(self, rng=None) -> 'FieldElement':
        """Uniform element via rejection sampling on order.bit_length() bits.

        rng is any object with getrandbits (random.Random for reproducible
        tests); None draws from the secrets module.
        """
        while True:
            if rng is not None:
                r = rng.getrandbits(self.bits)
            else:
                r = secrets.randbits(self.bits)
            if r < self.order:
                return FieldElement(r, self)

    def __eq__(self, other):
        if not isinstance(other, PrimeField):
            return NotImplemented
        return self.order == other.order

    def __hash__(self):
        return hash(('PrimeField', self.order))

    def __repr__(self):
        return f"PrimeField({self.bits}-bit)"


class FieldElement:
    """An integer in [0, field.order) with modular arithmetic.

    Plain ints on either side of an operator are reduced into the field;
    elements of another field raise FieldMismatch.
    """

    __slots__ = ('value', 'field')

    def __init__(self, value: int, field: PrimeField):
        if not 0 <= value < field.order:
            raise FieldElementOutOfRange(
                f"Value must be in [0, {field.order}), got {value}"
            )
        self.value = value
        self.field = field

    def _coerce(self, other):
        if isinstance(other, FieldElement):
            if other.field != self.field:
                raise FieldMismatch("Operands belong to different fields")
            return other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return other % self.field.order
        return NotImplemented

    def __add__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        s = self.value + o
        if s >= self.field.order:
            s -= self.field.order
        return FieldElement(s, self.field)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        s = self.value - o
        if s < 0:
            s += self.field.order
        return FieldElement(s, self.field)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return FieldElement(o, self.field) - self

    def __mul__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return FieldElement(self.value * o % self.field.order, self.field)

    __rmul__ = __mul__

    def __neg__(self):
        return FieldElement(self.field.order - self.value if self.value else 0, self.field)

    def inverse(self) -> 'FieldElement':
        """Multiplicative inverse via Fermat's little theorem: a^(q-2) mod q."""
        if self.value == 0:
            raise NotInvertible("Cannot invert zero")
        q = self.field.order
        return FieldElement(pow(self.value, q - 2, q), self.field)

    def __truediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self * FieldElement(o, self.field).inverse()

    def __rtruediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return FieldElement(o, self.field) * self.inverse()

    def __pow__(self, exponent: int):
        exponent = _as_int(exponent)
        if exponent < 0:
            return self.inverse() ** -exponent
        return FieldElement(pow(self.value, exponent, self.field.order), self.field)

    def __eq__(self, other):
        if isinstance(other, FieldElement):
            return self.field == other.field and self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    __index__ = __int__

    def __bool__(self):
        return self.value != 0

    def __repr__(self):
        return f"FieldElement({self.value})"


def poly_eval_low(coeffs: list, x) -> FieldElement:
    """Evaluate polynomial at x using Horner's method.

    coeffs = [a_0, a_1, ..., a_d] (lowest degree first), all FieldElements.
    Returns a_0 + a_1 * x + ... + a_d * x^d.
    """
    result = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        result = result * x + c
    return result


def lagrange_basis_at(xs: list, i: int, target) -> FieldElement:
    """Compute Lagrange basis coefficient L_i(target).

    xs = list of x-coordinates (FieldElements).
    Returns prod_{j!=i} (target - x_j) / (x_i - x_j).
    Raises NotInvertible when two x-coordinates coincide.
    """
    xi = xs[i]
    num = xi.field.one
    den = xi.field.one
    for j, xj in enumerate(xs):
        if j == i:
            continue
        num = num * (target - xj)
        den = den * (xi - xj)
    return num * den.inverse()


def lagrange_interpolate(points: list, x) -> FieldElement:
    """Evaluate the interpolating polynomial at x given a set of points.

    points = [(x_0, y_0), (x_1, y_1), ...] of FieldElements.
    L(x) = sum_i y_i * prod_{j!=i} (x - x_j)/(x_i - x_j).
    """
    xs = [p[0] for p in points]
    result = xs[0].field.zero
    for i, (_, yi) in enumerate(points):
        result = result + yi * lagrange_basis_at(xs, i, x)
    return result


def newton_coefficients(points: list) -> tuple:
    """Compute Newton divided difference coefficients from points.

    O(n^2) setup. Returns (xs, coeffs) for use with newton_eval.
    """
    n = len(points)
    xs = [p[0] for p in points]
    d = [p[1] for p in points]

    for j in range(1, n):
        for i in range(n - 1, j - 1, -1):
            d[i] = (d[i] - d[i - 1]) / (xs[i] - xs[i - j])

    return xs, d


def newton_eval(xs: list, coeffs: list, t) -> FieldElement:
    """Evaluate Newton-form polynomial at t in O(n)."""
    n = len(coeffs)
    result = coeffs[n - 1]
    for i in range(n - 2, -1, -1):
        result = result * (t - xs[i]) + coeffs[i]
    return result


class InterpolatingPoly:
    """Precomputed polynomial from points for fast multi-evaluation.

    O(n^2) construction, O(n) per evaluation.
    """

    __slots__ = ('xs', 'coeffs', 'n')

    def __init__(self, points: list):
        self.xs, self.coeffs = newton_coefficients(points)
        self.n = len(points)

    def eval_at(self, t) -> FieldElement:
        return newton_eval(self.xs, self.coeffs, t)
