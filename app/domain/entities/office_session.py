"""Office session domain entity.

A session is valid while active and unexpired. Stale sessions (expired, or
logged out, before the sweep cutoff) are removed by the sweeper.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class OfficeSessionEntity:
    """Domain entity for an account-free office dashboard session."""

    id: str
    office_id: str
    is_active: bool
    login_time: datetime
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return self.is_active and now < self.expires_at

    def is_stale(self, cutoff: datetime) -> bool:
        """Expired before cutoff, or inactive and opened before cutoff.

        No logout timestamp is kept, so login_time bounds inactive sessions.
        """
        if self.expires_at <= cutoff:
            return True
        return not self.is_active and self.login_time <= cutoff
