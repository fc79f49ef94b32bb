"""
API Call Counter - per-provider daily call budget
"""
from datetime import date
from typing import Dict, Optional

from walkify.config import settings


class APICounter:
    """Counts provider calls per day"""

    def __init__(self, max_calls_per_day: Optional[int] = None):
        self.max_calls_per_day = (
            max_calls_per_day if max_calls_per_day is not None else settings.max_api_calls_per_day
        )
        self.call_count: Dict[str, int] = {}
        self.current_date = date.today()

    def _roll_over(self) -> None:
        # Reset counters when the date changes
        today = date.today()
        if today != self.current_date:
            self.call_count.clear()
            self.current_date = today

    def can_make_call(self, provider: str) -> bool:
        """Check if the provider may be called again today"""
        self._roll_over()
        return self.call_count.get(provider, 0) < self.max_calls_per_day

    def record_call(self, provider: str) -> None:
        """Record one API call"""
        self._roll_over()
        self.call_count[provider] = self.call_count.get(provider, 0) + 1

    def get_remaining_calls(self, provider: str) -> int:
        """Get remaining call count"""
        self._roll_over()
        return max(0, self.max_calls_per_day - self.call_count.get(provider, 0))


# Global counter instance
api_counter = APICounter()
