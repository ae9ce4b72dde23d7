from referhub.models.user import User
from referhub.models.candidate import Candidate, CANDIDATE_STATUSES, DEFAULT_STATUS

__all__ = ["User", "Candidate", "CANDIDATE_STATUSES", "DEFAULT_STATUS"]
