import secrets

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from curve import INFINITY, P256, Point, Scalar, base_mult, point_add, scalar_mult
from errors import InvalidPoint, PointAtInfinity


def test_toy_curve_small_multiples(toy):
    g = (toy.gx, toy.gy)
    assert point_add(toy, g, g) == (6, 3)
    assert scalar_mult(toy, 2, g) == (6, 3)
    assert scalar_mult(toy, 3, g) == (10, 6)


def test_toy_group_order(toy):
    g = (toy.gx, toy.gy)
    acc = INFINITY
    for _ in range(toy.n - 1):
        acc = point_add(toy, acc, g)
        assert acc is not INFINITY
    assert point_add(toy, acc, g) is INFINITY


def test_ladder_matches_repeated_addition(toy):
    g = (toy.gx, toy.gy)
    acc = INFINITY
    for k in range(3 * toy.n):
        assert scalar_mult(toy, k, g) == acc
        acc = point_add(toy, acc, g)


def test_every_multiple_is_on_curve(toy):
    for k in range(1, toy.n):
        x, y = scalar_mult(toy, k, (toy.gx, toy.gy))
        assert toy.is_on_curve(x, y)


def test_scalar_is_reduced(toy):
    assert toy.scalar(20).value == 1
    assert Scalar(toy, -1).value == 18
    assert (toy.scalar(10) + toy.scalar(9)).value == 0


def test_scalar_repr_hides_value(toy):
    assert repr(toy.scalar(5)) == "Scalar(curve=toy-17)"


def test_point_rejects_off_curve(toy):
    with pytest.raises(InvalidPoint):
        Point(toy, 5, 2)


def test_point_rejects_out_of_range(toy):
    with pytest.raises(InvalidPoint):
        Point(toy, 5 + toy.p, 1)


def test_identity_is_not_a_point(toy):
    with pytest.raises(PointAtInfinity):
        Point.from_affine(toy, INFINITY)
    with pytest.raises(PointAtInfinity):
        base_mult(toy.scalar(toy.n))


def test_p256_generator_is_valid():
    g = P256.generator
    assert P256.is_on_curve(g.x, g.y)
    assert scalar_mult(P256, P256.n - 1, g.affine) == (g.x, (-g.y) % P256.p)


@pytest.mark.parametrize("k", [1, 2, 3, 0xdeadbeef, P256.n - 1])
def test_p256_matches_library(k):
    expected = ec.derive_private_key(k, ec.SECP256R1()).public_key().public_numbers()
    point = base_mult(P256.scalar(k))
    assert (point.x, point.y) == (expected.x, expected.y)


def test_p256_random_scalars_match_library():
    for _ in range(5):
        k = 1 + secrets.randbelow(P256.n - 1)
        expected = ec.derive_private_key(k, ec.SECP256R1()).public_key().public_numbers()
        assert scalar_mult(P256, k, P256.generator.affine) == (expected.x, expected.y)
