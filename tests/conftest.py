"""Pytest fixtures for pqverify tests."""

import pytest

from pqverify import (
    DILITHIUM_RING,
    ETHDILITHIUM_PARAMS,
    FALCON512_PARAMS,
    FALCON_RING,
    NTTBackend,
    WireBackend,
)

from lattice_refs import DilithiumTestSigner, make_falcon_vector

FALCON_MESSAGE = b"My name is Renaud from ZKNOX!!!!"
DILITHIUM_MESSAGE = b"Dilithium verification over the NTT backend"


@pytest.fixture(scope="session")
def falcon_backend():
    """In-process backend over the Falcon ring."""
    return NTTBackend(FALCON_RING)


@pytest.fixture(scope="session")
def dilithium_backend():
    """In-process backend over the Dilithium ring."""
    return NTTBackend(DILITHIUM_RING)


@pytest.fixture(scope="session")
def falcon_wire_backend():
    """Falcon backend speaking the wire format to the in-process accelerator."""
    return WireBackend(FALCON_RING)


@pytest.fixture(scope="session")
def dilithium_wire_backend():
    """Dilithium backend speaking the wire format to the in-process accelerator."""
    return WireBackend(DILITHIUM_RING)


@pytest.fixture(scope="session")
def falcon_vector(falcon_backend):
    """A (message, salt, s2, ntth) tuple that verifies."""
    salt, s2, ntth = make_falcon_vector(falcon_backend, FALCON512_PARAMS, FALCON_MESSAGE, seed=7)
    return FALCON_MESSAGE, salt, s2, ntth


@pytest.fixture(scope="session")
def dilithium_signer(dilithium_backend):
    """Deterministic test signer with a fixed key pair."""
    return DilithiumTestSigner(dilithium_backend, ETHDILITHIUM_PARAMS, seed=42)


@pytest.fixture(scope="session")
def dilithium_vector(dilithium_signer):
    """A (public key, message, signature) tuple that verifies with empty context."""
    signature = dilithium_signer.sign(DILITHIUM_MESSAGE)
    return dilithium_signer.public_key, DILITHIUM_MESSAGE, signature
