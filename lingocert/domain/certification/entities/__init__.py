from .certificate import Certificate, LearnerSnapshot

__all__ = ["Certificate", "LearnerSnapshot"]
