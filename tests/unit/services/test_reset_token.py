import hashlib

from src.app.services.reset_token import digest_reset_secret, generate_reset_secret


def test_secret_is_32_random_bytes_in_hex():
    secret, _ = generate_reset_secret()

    assert len(secret) == 64
    int(secret, 16)


def test_digest_is_sha256_of_secret():
    secret, token_digest = generate_reset_secret()

    assert token_digest == hashlib.sha256(secret.encode()).hexdigest()
    assert token_digest != secret


def test_digest_is_deterministic():
    assert digest_reset_secret("abc") == digest_reset_secret("abc")
    assert digest_reset_secret("abc") != digest_reset_secret("abd")


def test_secrets_do_not_repeat():
    secrets_seen = {generate_reset_secret()[0] for _ in range(50)}

    assert len(secrets_seen) == 50
