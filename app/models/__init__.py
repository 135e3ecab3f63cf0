from .impulse_log import ImpulseLog, Acted
from .report import Report
from .user import User

__all__ = [
    "ImpulseLog",
    "Acted",
    "Report",
    "User",
]
