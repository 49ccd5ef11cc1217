from datetime import datetime, timedelta
from threading import Lock

from teamsite.adapters.clock import SystemClock
from teamsite.config.models import RateLimitRules, RateLimitWindow
from teamsite.core.ports.time import TimePort


class RateLimiter:
    """Sliding-window limiter keyed by action and client address."""

    def __init__(
        self,
        rules: RateLimitRules,
        time_port: TimePort | None = None,
    ):
        self.rules = rules
        self._time = time_port if time_port is not None else SystemClock()
        self._history: dict[str, list[datetime]] = {}
        self._lock = Lock()

    def _cleanup(self, key: str, window: int) -> None:
        now = self._time.now_utc()
        cutoff = now - timedelta(seconds=window)
        if key in self._history:
            self._history[key] = [t for t in self._history[key] if t > cutoff]
            if not self._history[key]:
                del self._history[key]

    def allow_request(self, key: str, window: int, limit: int) -> bool:
        """
        Check if request is allowed.
        If allowed, records the attempt and returns True.
        If denied, returns False.
        """
        if limit <= 0:
            return False

        with self._lock:
            self._cleanup(key, window)
            current_count = len(self._history.get(key, []))

            if current_count >= limit:
                return False

            if key not in self._history:
                self._history[key] = []
            self._history[key].append(self._time.now_utc())
            return True

    def _check(self, action: str, cfg: RateLimitWindow, client: str) -> bool:
        return self.allow_request(f"{action}:{client}", cfg.window_seconds, cfg.max_requests)

    def check_login(self, ip: str) -> bool:
        return self._check("login", self.rules.login, ip)

    def check_contact(self, ip: str) -> bool:
        return self._check("contact", self.rules.contact, ip)

    def check_application(self, ip: str) -> bool:
        return self._check("application", self.rules.application, ip)
