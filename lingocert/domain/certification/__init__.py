"""Certification context: certificate issuance, supersession and verification."""
