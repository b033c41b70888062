"""Export audit logging for generated evidence reports.

Every exported document is recorded with its timestamp, encoding, template,
the evidence items it contains and a SHA-256 digest of the produced bytes,
so a report handed to a third party can later be matched to its inputs.
"""

import hashlib
import json
import logging
import logging.handlers
import os
import platform
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence


class ExportAuditLogger:
    """Append-only audit log of report exports (JSON lines + text)."""

    def __init__(
        self,
        log_dir: Path,
        log_name: str = "evidence_report_exports",
        max_bytes: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 5,
    ):
        """Initialize the export audit logger with rotating file handlers."""
        self.log_dir = Path(log_dir)
        self.log_name = log_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._lock = threading.Lock()

        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.json_logger = self._setup_logger("jsonl")
        self.text_logger = self._setup_logger("log")

    @property
    def json_path(self) -> Path:
        return self.log_dir / f"{self.log_name}.jsonl"

    def _setup_logger(self, suffix: str) -> logging.Logger:
        """Setup a logger writing to ``<log_name>.<suffix>``."""
        logger = logging.getLogger(f"{self.log_name}_{suffix}")
        logger.setLevel(logging.INFO)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.log_name}.{suffix}",
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(logging.INFO)
        logger.addHandler(handler)
        logger.propagate = False

        return logger

    def close(self) -> None:
        """Flush and detach the file handlers."""
        for logger in (self.json_logger, self.text_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    @staticmethod
    def _system_info() -> dict:
        return {
            "user": os.environ.get("USERNAME") or os.environ.get("USER", "unknown"),
            "pid": os.getpid(),
            "platform": platform.system(),
        }

    @staticmethod
    def _format_text_entry(entry: dict) -> str:
        status = "[OK]" if entry.get("success", True) else "[FAIL]"
        parts = [
            entry["timestamp"],
            status,
            f"Action: {entry['action']}",
        ]
        if entry.get("format"):
            parts.append(f"Format: {entry['format']}")
        if entry.get("sha256"):
            parts.append(f"SHA-256: {entry['sha256']}")
        if entry.get("output_path"):
            parts.append(f"Output: {entry['output_path']}")
        return " | ".join(parts)

    def _write(self, entry: dict) -> None:
        with self._lock:
            self.json_logger.info(json.dumps(entry, ensure_ascii=False, default=str))
            self.text_logger.info(self._format_text_entry(entry))

    def log_export(
        self,
        data: bytes,
        output_format: str,
        template_id: str,
        evidence_ids: Sequence[str],
        author: Optional[str] = None,
        output_path: Optional[Path] = None,
    ) -> dict:
        """Record a successful export and return the written entry."""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": "REPORT_EXPORT",
            "success": True,
            "format": output_format,
            "template": template_id,
            "evidence_ids": list(evidence_ids),
            "evidence_count": len(evidence_ids),
            "sha256": hashlib.sha256(data).hexdigest(),
            "size_bytes": len(data),
            "system_info": self._system_info(),
        }
        if author:
            entry["author"] = author
        if output_path:
            entry["output_path"] = str(output_path)

        self._write(entry)
        return entry

    def log_failure(self, action: str, error: Exception) -> dict:
        """Record a failed export attempt."""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "success": False,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "system_info": self._system_info(),
        }
        self._write(entry)
        return entry

    def read_entries(self) -> list[dict]:
        """Return every JSON entry written so far, skipping corrupt lines."""
        if not self.json_path.exists():
            return []

        entries = []
        with open(self.json_path, "r", encoding="utf-8") as f:
            for line in f:
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        return entries
