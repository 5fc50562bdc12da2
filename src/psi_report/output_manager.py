"""Output manager for persisting rendered and raw PSI reports."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional

from psi_report.constants import FULL_REPORT_SUFFIX, SHORT_REPORT_SUFFIX
from psi_report.formatters import compact_timestamp, sanitize_for_filename

logger = logging.getLogger(__name__)


class OutputManager:
    """Writes the short (rendered) and full (raw payload) report files."""

    def __init__(self, base_output_dir: Optional[str] = None):
        """Initialize output manager.

        Args:
            base_output_dir: Directory for report files (defaults to the current directory)
        """
        self.base_output_dir = Path(base_output_dir) if base_output_dir else Path(".")

    @staticmethod
    def report_basename(url: str, strategy: str, timestamp: Optional[datetime] = None) -> str:
        """Build the shared file name stem for one run.

        Args:
            url: Humanized page URL
            strategy: mobile or desktop
            timestamp: Run time (defaults to now, UTC)

        Returns:
            Stem such as "example-com--page_mobile_20261019120000"
        """
        return f"{sanitize_for_filename(url)}_{strategy}_{compact_timestamp(timestamp)}"

    def save(
        self,
        url: str,
        strategy: str,
        rendered: str,
        raw: Mapping[str, Any],
        timestamp: Optional[datetime] = None,
    ) -> List[Path]:
        """Save the rendered report and the full payload side by side.

        Write errors are logged and never raised; each file is attempted
        independently.

        Args:
            url: Humanized page URL
            strategy: mobile or desktop
            rendered: Rendered report string
            raw: Raw API response
            timestamp: Run time (defaults to now, UTC)

        Returns:
            Paths that were written successfully
        """
        stem = self.base_output_dir / self.report_basename(url, strategy, timestamp)

        written = []
        artifacts = [
            (Path(f"{stem}{SHORT_REPORT_SUFFIX}"), rendered),
            (Path(f"{stem}{FULL_REPORT_SUFFIX}"), json.dumps(raw, ensure_ascii=False)),
        ]
        for path, content in artifacts:
            if self._write_text(path, content):
                written.append(path)

        return written

    def _write_text(self, path: Path, content: str) -> bool:
        try:
            path.write_text(content, encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write report file {path}: {e}")
            return False

        logger.info(f"Saved {path}")
        return True
