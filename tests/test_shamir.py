"""Tests for Shamir secret sharing."""

import itertools
import random
import pytest
from ecvss.errors import (
    DuplicateShareIndex, FieldElementOutOfRange, FieldMismatch,
    InsufficientShares, InvalidShareIndex, InvalidThreshold,
)
from ecvss.field import lagrange_interpolate
from ecvss.share import Share
from ecvss.shamir import (
    split, reconstruct, reconstruct_at, consistency_check, is_consistent,
)


class TestRoundTrip:
    """Secret sharing and reconstruction."""

    def test_basic_3_of_5(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 3, 5, rng=rng)
        assert len(shares) == 5
        assert [s.index for s in shares] == [1, 2, 3, 4, 5]
        # Any 3 shares reconstruct
        assert reconstruct(shares[:3]) == secret
        assert reconstruct(shares[1:4]) == secret
        assert reconstruct(shares[2:]) == secret

    def test_every_subset(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 3, 5, field, rng)
        for subset in itertools.combinations(shares, 3):
            assert reconstruct(subset, threshold=3) == secret

    def test_order_independent(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 4, 7, field, rng)
        subset = shares[1:5]
        for _ in range(5):
            rng.shuffle(subset)
            assert reconstruct(subset) == secret

    def test_more_than_threshold(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 3, 8, field, rng)
        assert reconstruct(shares) == secret

    def test_t_equals_1(self, rng, field):
        """t=1: constant polynomial, every share = secret."""
        secret = field.random_element(rng)
        shares = split(secret, 1, 5, field, rng)
        for _, y in shares:
            assert y == secret
        assert reconstruct([shares[0]], threshold=1) == secret

    def test_t_equals_n(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 7, 7, field, rng)
        assert reconstruct(shares) == secret

    def test_various_thresholds(self, rng, field):
        for t, n in [(2, 3), (3, 5), (7, 10), (14, 20), (10, 10)]:
            secret = field.random_element(rng)
            shares = split(secret, t, n, field, rng)
            # Exactly t shares suffice
            assert reconstruct(shares[:t], threshold=t) == secret

    def test_zero_secret(self, rng, field):
        shares = split(0, 3, 5, field, rng)
        assert reconstruct(shares[:3]) == 0

    def test_max_secret(self, rng, field):
        shares = split(field.order - 1, 3, 5, field, rng)
        assert reconstruct(shares[:3]) == field.order - 1

    def test_small_field(self, rng, small_group):
        field = small_group.field
        shares = split(1000, 3, 6, field, rng)
        assert reconstruct(shares[3:]) == 1000

    def test_reconstruct_at_nonzero(self, rng, field):
        """Reconstruct at an arbitrary point, not just 0."""
        shares = split(field.random_element(rng), 5, 10, field, rng)
        # The polynomial at x=7 is share 7
        assert reconstruct_at(shares[:5], 7) == shares[6].value


class TestScenarios:

    def test_secret_42_three_of_five(self, rng, field):
        shares = split(42, 3, 5, field, rng)
        by_index = {s.index: s for s in shares}
        picked = [by_index[1], by_index[3], by_index[5]]
        assert reconstruct(picked, threshold=3) == 42
        with pytest.raises(InsufficientShares):
            reconstruct([by_index[1], by_index[2]], threshold=3)

    def test_threshold_above_share_count(self, field):
        with pytest.raises(InvalidThreshold):
            split(42, 4, 3, field)


class TestSecrecy:
    """t-1 shares reveal no information about the secret."""

    def test_t_minus_1_shares_miss_secret(self, rng, field):
        shares = split(42, 3, 5, field, rng)
        assert reconstruct(shares[:2]) != 42

    def test_t_minus_1_shares_fit_any_secret(self, rng, field):
        """With t-1 shares, every candidate secret is equally consistent."""
        t = 5
        shares = split(42, t, 10, field, rng)
        subset = [(field(s.index), s.value) for s in shares[:t - 1]]
        for candidate in range(20):
            points = [(field(0), field(candidate))] + subset
            for x, y in points:
                assert lagrange_interpolate(points, x) == y


class TestCorruptionDetection:
    """Consistency check finds tampered shares."""

    def _tamper(self, shares, pos, delta=1):
        shares[pos] = shares[pos].replace_value(shares[pos].value + delta)

    def test_no_corruption(self, rng, field):
        shares = split(field.random_element(rng), 5, 10, field, rng)
        assert consistency_check(shares, 5) == []
        assert is_consistent(shares, 5)

    def test_single_corruption(self, rng, field):
        shares = split(field.random_element(rng), 5, 10, field, rng)
        self._tamper(shares, 3)
        assert 3 in consistency_check(shares, 5)
        assert not is_consistent(shares, 5)

    def test_multiple_corruptions(self, rng, field):
        shares = split(field.random_element(rng), 3, 10, field, rng)
        for pos in (1, 5):
            self._tamper(shares, pos, 7)
        corrupt = consistency_check(shares, 3)
        assert 1 in corrupt
        assert 5 in corrupt

    def test_one_spare_share(self, rng, field):
        """With t+1 shares one corruption is detectable."""
        shares = split(field.random_element(rng), 3, 4, field, rng)
        self._tamper(shares, 0)
        assert 0 in consistency_check(shares, 3)

    def test_no_redundancy_returns_empty(self, rng, field):
        shares = split(field.random_element(rng), 3, 3, field, rng)
        self._tamper(shares, 0)
        assert consistency_check(shares, 3) == []
        assert is_consistent(shares, 3)

    def test_tampered_share_changes_secret(self, rng, field):
        secret = field.random_element(rng)
        shares = split(secret, 3, 5, field, rng)
        self._tamper(shares, 0)
        assert reconstruct(shares[:3]) != secret


class TestEdgeCases:
    """Input validation."""

    def test_invalid_secret_range(self, field):
        with pytest.raises(FieldElementOutOfRange):
            split(field.order, 3, 5, field)
        with pytest.raises(ValueError):
            split(-1, 3, 5, field)

    def test_threshold_zero(self, field):
        with pytest.raises(InvalidThreshold):
            split(42, 0, 5, field)

    def test_share_count_exceeds_field(self, small_group):
        with pytest.raises(FieldElementOutOfRange):
            split(1, 2, small_group.field.order, small_group.field)

    def test_empty_shares(self):
        with pytest.raises(InsufficientShares):
            reconstruct([])

    def test_single_share_without_threshold(self, rng, field):
        shares = split(42, 1, 3, field, rng)
        with pytest.raises(InsufficientShares):
            reconstruct(shares[:1])

    def test_reconstruct_threshold_zero(self, rng, field):
        shares = split(42, 2, 3, field, rng)
        with pytest.raises(InvalidThreshold):
            reconstruct(shares, threshold=0)

    def test_duplicate_index_same_value(self, rng, field):
        shares = split(42, 2, 3, field, rng)
        with pytest.raises(DuplicateShareIndex):
            reconstruct([shares[0], shares[0], shares[1]])

    def test_duplicate_index_different_value(self, rng, field):
        shares = split(42, 2, 3, field, rng)
        forged = shares[0].replace_value(shares[0].value + 1)
        with pytest.raises(DuplicateShareIndex):
            reconstruct([shares[0], forged])

    def test_mixed_fields(self, rng, field, small_group):
        a = split(42, 2, 3, field, rng)
        b = split(42, 2, 3, small_group.field, rng)
        with pytest.raises(FieldMismatch):
            reconstruct([a[0], b[1]])

    def test_share_index_out_of_field(self, small_group):
        f = small_group.field
        shares = [Share(1, f(3)), Share(f.order + 2, f(5))]
        with pytest.raises(FieldElementOutOfRange):
            reconstruct(shares)

    def test_index_zero_never_issued(self, field):
        with pytest.raises(InvalidShareIndex):
            Share(0, field(42))

    def test_errors_are_value_errors(self, field):
        with pytest.raises(ValueError):
            split(42, 4, 3, field)


class TestStateless:

    def test_independent_splits(self, field):
        """Same seed, same shares: no state carried between calls."""
        a = split(42, 3, 5, field, random.Random(5))
        split(43, 4, 6, field, random.Random(9))
        b = split(42, 3, 5, field, random.Random(5))
        assert a == b
