from .learner_directory import LearnerDirectoryProtocol

__all__ = ["LearnerDirectoryProtocol"]
