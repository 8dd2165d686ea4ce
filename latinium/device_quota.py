"""
Client-side advisory quota: 15 analyses per 6 hours per device.

This is a courtesy limit for well-behaved clients. The server limiter is the
enforcement point; nothing here can stop a client that deletes its state file.
"""

import hashlib
import json
import locale
import logging
import os
import platform
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

MAX_REQUESTS = 15
TIME_WINDOW_SECONDS = 6 * 60 * 60
DEFAULT_STATE_PATH = Path.home() / ".latinium" / "rate_limit.json"
DEVICE_ID_LENGTH = 16


def _locale_name() -> str:
    try:
        return locale.getlocale()[0] or ""
    except ValueError:
        return ""


def device_fingerprint() -> str:
    """Hash of stable environment characteristics."""
    characteristics = [
        platform.node(),
        platform.system(),
        platform.release(),
        platform.machine(),
        platform.python_implementation(),
        _locale_name(),
        str(time.timezone),
        os.getenv("LANG", ""),
    ]
    digest = hashlib.sha256("|".join(characteristics).encode("utf-8")).hexdigest()
    return digest[:DEVICE_ID_LENGTH]


class TimestampStore(ABC):
    """Per-key ordered sequence of request timestamps (seconds since epoch)."""

    @abstractmethod
    def append(self, key: str, timestamp: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def prune(self, key: str, cutoff: float) -> List[float]:
        """Atomically drop timestamps <= cutoff and return the survivors."""
        raise NotImplementedError


class JsonFileTimestampStore(TimestampStore):
    """
    Timestamps persisted to a small JSON document:
    {"device_id": "...", "requests": {"<key>": [ts, ...]}}
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Failed to load rate limit state from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed rate limit state in %s", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to save rate limit state to %s: %s", self.path, e)

    def _requests(self, data: Dict[str, Any]) -> Dict[str, List[float]]:
        requests = data.get("requests")
        if not isinstance(requests, dict):
            requests = {}
            data["requests"] = requests
        return requests

    def append(self, key: str, timestamp: float) -> None:
        with self._lock:
            data = self._read()
            self._requests(data).setdefault(key, []).append(timestamp)
            self._write(data)

    def prune(self, key: str, cutoff: float) -> List[float]:
        with self._lock:
            data = self._read()
            requests = self._requests(data)
            values = requests.get(key, [])
            recent = [float(v) for v in values if isinstance(v, (int, float)) and v > cutoff]
            if len(recent) != len(values):
                requests[key] = recent
                self._write(data)
        return recent

    def get_value(self, name: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(name)
        return value if isinstance(value, str) else None

    def set_value(self, name: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[name] = value
            self._write(data)


@dataclass(frozen=True)
class QuotaStatus:
    is_limited: bool
    remaining: int
    reset_at: float
    time_until_reset: float


class DeviceQuota:
    def __init__(
        self,
        state_path: Union[str, Path, None] = None,
        max_requests: int = MAX_REQUESTS,
        window_seconds: float = TIME_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
        fingerprint: Callable[[], str] = device_fingerprint,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._store = JsonFileTimestampStore(state_path or DEFAULT_STATE_PATH)
        self._clock = clock
        self._fingerprint = fingerprint
        self._device_id: Optional[str] = None

    def device_id(self) -> str:
        """Generated once, then read back from the state file."""
        if self._device_id is None:
            device_id = self._store.get_value("device_id")
            if not device_id:
                device_id = self._fingerprint()
                self._store.set_value("device_id", device_id)
            self._device_id = device_id
        return self._device_id

    def check(self) -> QuotaStatus:
        now = self._clock()
        recent = self._store.prune(self.device_id(), now - self.window_seconds)
        wait = max(0.0, min(recent) + self.window_seconds - now) if recent else 0.0
        return QuotaStatus(
            is_limited=len(recent) >= self.max_requests,
            remaining=max(0, self.max_requests - len(recent)),
            reset_at=now + wait,
            time_until_reset=wait,
        )

    def record(self) -> None:
        self._store.append(self.device_id(), self._clock())

    def format_time_until_reset(self) -> str:
        wait = self.check().time_until_reset
        if wait <= 0:
            return "Ready"
        hours, rest = divmod(int(wait), 3600)
        minutes, seconds = divmod(rest, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        if minutes > 0:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"

    def status(self) -> Dict[str, Any]:
        quota = self.check()
        return {
            "remaining": quota.remaining,
            "total": self.max_requests,
            "percentage": round(quota.remaining / self.max_requests * 100),
            "time_until_reset": self.format_time_until_reset(),
            "is_limited": quota.is_limited,
        }
