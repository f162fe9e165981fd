from .certificate_id_generator import CertificateIdGenerator
from .issuance_policy import IssuanceAction, IssuanceDecision, IssuancePolicy

__all__ = ["CertificateIdGenerator", "IssuanceAction", "IssuanceDecision", "IssuancePolicy"]
