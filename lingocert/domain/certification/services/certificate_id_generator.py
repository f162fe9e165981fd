"""Generator for public, non-guessable certificate identifiers."""

import re
import secrets
from typing import Final

TOKEN_BYTES: Final = 8


class CertificateIdGenerator:
    """Creates identifiers of the form ``<PREFIX>-<16 uppercase hex chars>``.

    The token comes from a CSPRNG, so ids carry 64 bits of entropy and
    reveal nothing about issuance order or other learners' certificates.
    """

    def __init__(self, prefix: str) -> None:
        if not re.fullmatch(r"[A-Z][A-Z0-9]{0,9}", prefix):
            raise ValueError("Certificate id prefix must be 1-10 uppercase alphanumerics")
        self.prefix = prefix
        self._pattern = re.compile(rf"{re.escape(prefix)}-[0-9A-F]{{{TOKEN_BYTES * 2}}}")

    def generate(self) -> str:
        return f"{self.prefix}-{secrets.token_hex(TOKEN_BYTES).upper()}"

    def is_well_formed(self, certificate_id: str) -> bool:
        return self._pattern.fullmatch(certificate_id) is not None
