"""Password hashing tests."""

from notekeep.auth.password import burn_verification, hash_password, verify_password


def test_hash_is_salted_bcrypt():
    h1 = hash_password("correct horse", rounds=4)
    h2 = hash_password("correct horse", rounds=4)
    assert h1.startswith("$2")
    assert h1 != h2
    assert "correct horse" not in h1


def test_verify_roundtrip():
    h = hash_password("s3cret-pass", rounds=4)
    assert verify_password("s3cret-pass", h)
    assert not verify_password("s3cret-pasS", h)


def test_verify_garbage_hash_is_false():
    assert not verify_password("whatever", "not-a-bcrypt-hash")


def test_burn_verification_returns_nothing():
    assert burn_verification("anything") is None
