"""
Alerter Module.

Collects non-fatal notices raised while enumerating remote resources, keyed by
"provider/resource_type". Enumerators run concurrently, so writes are guarded
by a lock; the engine only receives the finalised copy returned by alerts().
"""

import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .analysis import Alert


def alert_key(provider: str, resource_type: str) -> str:
    return f"{provider}/{resource_type}"


class Alerter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._alerts: Dict[str, List[Alert]] = {}

    def send_alert(self, key: str, alert: Alert) -> None:
        with self._lock:
            self._alerts.setdefault(key, []).append(alert)

    def alerts(self) -> Mapping[str, Tuple[Alert, ...]]:
        """Returns a read-only snapshot of every alert sent so far."""
        with self._lock:
            return MappingProxyType(
                {key: tuple(alerts) for key, alerts in sorted(self._alerts.items())}
            )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(alerts) for alerts in self._alerts.values())
