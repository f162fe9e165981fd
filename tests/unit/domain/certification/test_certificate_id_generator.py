"""Tests for CertificateIdGenerator."""

import re

import pytest

from lingocert.domain.certification.services import CertificateIdGenerator


def test_generated_ids_have_prefix_and_16_hex_chars() -> None:
    generator = CertificateIdGenerator("LC")
    certificate_id = generator.generate()
    assert re.fullmatch(r"LC-[0-9A-F]{16}", certificate_id)
    assert generator.is_well_formed(certificate_id)


def test_generated_ids_are_not_sequential() -> None:
    generator = CertificateIdGenerator("LC")
    ids = {generator.generate() for _ in range(200)}
    assert len(ids) == 200


@pytest.mark.parametrize(
    "candidate",
    [
        "",
        "LC-",
        "LC-0123456789abcdef",
        "LC-0123456789ABCDE",
        "XX-0123456789ABCDEF",
        "LC-0123456789ABCDEF0",
        "LC-0123456789ABCDEF' OR 1=1",
    ],
)
def test_malformed_ids_are_rejected(candidate: str) -> None:
    assert CertificateIdGenerator("LC").is_well_formed(candidate) is False


def test_invalid_prefix_is_rejected() -> None:
    with pytest.raises(ValueError):
        CertificateIdGenerator("lc-")
