"""Prime-order groups that commitments live in.

The sharing core only needs scalar multiplication, point addition, a
generator g, a second generator h with unknown log_g(h), and the group
order (which fixes the scalar field shares live in). Anything exposing
that surface can back Feldman and Pedersen commitments:

- Secp256k1Group: elliptic curve group via libsecp256k1 (coincurve).
- SchnorrGroup: order-q subgroup of Z_p^*, written multiplicatively.

Group operations are written additively throughout (add, scalar_mul) even
when the underlying group is multiplicative.
"""

import hashlib
import logging
import operator

from coincurve import PublicKey

from ecvss.config import PEDERSEN_H_TAG, default_group_name
from ecvss.field import PrimeField

log = logging.getLogger(__name__)

SECP256K1_ORDER = int(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16
)


class Group:
    """Common surface of a prime-order group used for commitments."""

    name = None

    def __init__(self, order: int):
        self.order = order
        self.field = PrimeField(order)
        self._h = None

    @property
    def identity(self):
        raise NotImplementedError

    @property
    def generator(self):
        raise NotImplementedError

    @property
    def h(self):
        """Second generator for Pedersen commitments, hashed from a fixed tag."""
        if self._h is None:
            self._h = self.hash_to_point(PEDERSEN_H_TAG)
        return self._h

    def scalar_mul(self, point, k):
        raise NotImplementedError

    def add(self, a, b):
        raise NotImplementedError

    def hash_to_point(self, tag: bytes):
        raise NotImplementedError

    def sum(self, points):
        acc = self.identity
        for p in points:
            acc = self.add(acc, p)
        return acc

    def random_scalar(self, rng=None):
        return self.field.random_element(rng)

    def _reduce(self, k) -> int:
        return operator.index(k) % self.order

    def __repr__(self):
        return f"{type(self).__name__}({self.name})"


class ECPoint:
    """A secp256k1 point; key=None is the point at infinity.

    libsecp256k1 public keys cannot be the identity, but commitments to a
    zero coefficient (or a zero secret) must be, so it is modelled here.
    """

    __slots__ = ('key',)

    def __init__(self, key: PublicKey = None):
        self.key = key

    @property
    def is_identity(self) -> bool:
        return self.key is None

    def to_bytes(self) -> bytes:
        """SEC1 compressed encoding; a single zero byte for the identity."""
        if self.key is None:
            return b"\x00"
        return self.key.format(compressed=True)

    def __eq__(self, other):
        if not isinstance(other, ECPoint):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return f"ECPoint({self.to_bytes().hex()})"


class Secp256k1Group(Group):
    """secp256k1 via coincurve."""

    name = "secp256k1"

    def __init__(self):
        super().__init__(SECP256K1_ORDER)
        self._g = ECPoint(PublicKey.from_secret((1).to_bytes(32, "big")))

    @property
    def identity(self) -> ECPoint:
        return ECPoint()

    @property
    def generator(self) -> ECPoint:
        return self._g

    def scalar_mul(self, point: ECPoint, k) -> ECPoint:
        k = self._reduce(k)
        if k == 0 or point.key is None:
            return ECPoint()
        return ECPoint(point.key.multiply(k.to_bytes(32, "big")))

    def add(self, a: ECPoint, b: ECPoint) -> ECPoint:
        if a.key is None:
            return b
        if b.key is None:
            return a
        ea, eb = a.to_bytes(), b.to_bytes()
        # Same x, opposite y: P + (-P) is the point at infinity
        if ea[1:] == eb[1:] and ea != eb:
            return ECPoint()
        return ECPoint(PublicKey.combine_keys([a.key, b.key]))

    def hash_to_point(self, tag: bytes) -> ECPoint:
        """Try-and-increment: SHA-256(tag || counter) as an x-coordinate.

        Nobody learns the discrete log of the result relative to g.
        """
        counter = 0
        while True:
            x = hashlib.sha256(tag + counter.to_bytes(4, "big")).digest()
            try:
                point = ECPoint(PublicKey(b"\x02" + x))
            except ValueError:
                counter += 1
                continue
            log.debug("hash_to_point: tag %r mapped after %d attempts", tag, counter + 1)
            return point


class SchnorrGroup(Group):
    """Order-q subgroup of Z_p^* with q prime and q | p - 1.

    Elements are plain ints mod p; the identity is 1.
    """

    def __init__(self, p: int, q: int, g: int, name: str = None):
        if (p - 1) % q != 0:
            raise ValueError("q must divide p - 1")
        if g % p in (0, 1) or pow(g, q, p) != 1:
            raise ValueError("g must generate the order-q subgroup")
        super().__init__(q)
        self.p = p
        self._g = g % p
        self.name = name or f"schnorr-{p.bit_length()}"

    @property
    def identity(self) -> int:
        return 1

    @property
    def generator(self) -> int:
        return self._g

    def scalar_mul(self, point: int, k) -> int:
        return pow(point, self._reduce(k), self.p)

    def add(self, a: int, b: int) -> int:
        return a * b % self.p

    def hash_to_point(self, tag: bytes) -> int:
        """Hash into Z_p^* and raise to the cofactor to land in the subgroup."""
        cofactor = (self.p - 1) // self.order
        counter = 0
        while True:
            digest = hashlib.sha256(tag + counter.to_bytes(4, "big")).digest()
            point = pow(int.from_bytes(digest, "big") % self.p, cofactor, self.p)
            if point not in (0, 1, self._g):
                return point
            counter += 1


_REGISTRY = {
    Secp256k1Group.name: Secp256k1Group,
}
_instances = {}


def register_group(name: str, factory) -> None:
    """Make a group available to get_group() and the ECVSS_GROUP setting."""
    key = name.lower()
    _REGISTRY[key] = factory
    _instances.pop(key, None)


def get_group(name: str = None) -> Group:
    """Return the named group, or the configured default when name is None."""
    key = (name or default_group_name()).lower()
    if key not in _REGISTRY:
        raise ValueError(f"Unknown group {key!r}; known: {sorted(_REGISTRY)}")
    if key not in _instances:
        _instances[key] = _REGISTRY[key]()
    return _instances[key]
