import pytest

import recovery
from curve import P256, Point, base_mult, scalar_mult
from errors import InvalidPoint, PointAtInfinity, RecoveryMismatch
from exchange import send
from keysplit import split_key
from recovery import partial_point, recover


def test_homomorphic_recovery_exhaustive(toy):
    g = (toy.gx, toy.gy)
    for e in range(1, toy.n):
        ephemeral = Point.from_affine(toy, scalar_mult(toy, e, g))
        for a1 in range(toy.n):
            for a2 in range(toy.n):
                if (a1 + a2) % toy.n == 0:
                    continue
                result = recover(ephemeral, toy.scalar(a1), toy.scalar(a2), toy)
                assert result.point.affine == scalar_mult(toy, (a1 + a2) * e, g)


def test_zero_share_contributes_identity(toy):
    assert partial_point(toy.scalar(0), toy.generator) is None
    result = recover(toy.generator, toy.scalar(0), toy.scalar(4), toy)
    assert result.point == base_mult(toy.scalar(4))


def test_shares_summing_to_zero(toy):
    with pytest.raises(PointAtInfinity):
        recover(toy.generator, toy.scalar(7), toy.scalar(12), toy)


def test_share_order_does_not_matter():
    keys = split_key()
    ephemeral = send(keys.public_key).ephemeral_public_key
    forward = recover(ephemeral, keys.share_a, keys.share_b)
    backward = recover(ephemeral, keys.share_b, keys.share_a)
    assert forward == backward


def test_recovered_secret_matches_sender():
    for _ in range(3):
        keys = split_key()
        sent = send(keys.public_key)
        recovered = recover(sent.ephemeral_public_key, keys.share_a, keys.share_b)
        assert recovered.shared_secret == sent.shared_secret


def test_mismatch_is_fatal(toy, monkeypatch):
    monkeypatch.setattr(recovery, "combine_partials", lambda curve, p1, p2: (curve.gx, curve.gy))
    with pytest.raises(RecoveryMismatch):
        recover(base_mult(toy.scalar(3)), toy.scalar(1), toy.scalar(1), toy)


def test_rejects_point_on_other_curve(toy):
    keys = split_key()
    with pytest.raises(InvalidPoint):
        recover(toy.generator, keys.share_a, keys.share_b, P256)


def test_rejects_shares_of_other_curve(toy):
    with pytest.raises(ValueError):
        recover(P256.generator, toy.scalar(1), toy.scalar(2), P256)
