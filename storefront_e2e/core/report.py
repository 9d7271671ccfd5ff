"""Machine-readable run report written next to the terminal output."""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from .logging import get_logger

logger = get_logger(__name__)


class RunReport:
    """Collects one record per test phase result and writes them as JSON."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.started_at = datetime.now(timezone.utc)
        self._records: List[Dict] = []
        self._lock = threading.Lock()

    def record(
        self,
        nodeid: str,
        outcome: str,
        duration: float,
        when: str = "call",
        message: Optional[str] = None,
    ) -> None:
        """Add the result of one test phase."""
        with self._lock:
            self._records.append({
                "nodeid": nodeid,
                "when": when,
                "outcome": outcome,
                "duration": round(duration, 3),
                "message": message,
            })

    @property
    def records(self) -> List[Dict]:
        with self._lock:
            return list(self._records)

    def summary(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for record in self.records:
            counts[record["outcome"]] = counts.get(record["outcome"], 0) + 1
        return counts

    def write(self) -> Path:
        """Write the report and return its path."""
        payload = {
            "started_at": self.started_at.isoformat(),
            "finished_at": datetime.now(timezone.utc).isoformat(),
            "summary": self.summary(),
            "tests": self.records,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Run report written", path=str(self.path), tests=len(payload["tests"]))
        return self.path
