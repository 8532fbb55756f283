from pathlib import Path
import logging
import sys
from typing import Optional
from datetime import datetime


def setup_logging(
    logs_dir: Optional[str | Path] = None,
    log_file_name: str = "server.log",
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure root logging to stderr and a file under `logs_dir`.

    Idempotent: calling multiple times won't add duplicate handlers.
    stdout is reserved for the MCP stdio transport, so console output goes to stderr.
    Returns a module-level logger for callers to use.
    """
    if logs_dir is None:
        logs_dir = Path(__file__).resolve().parent.parent / "logs"
    else:
        logs_dir = Path(logs_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    # One timestamped file per run; skip if this process already has a file handler
    has_file_handler = any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
    if not has_file_handler:
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            base = Path(log_file_name).stem
            ext = Path(log_file_name).suffix or ".log"
            fh = logging.FileHandler(logs_dir / f"{base}_{timestamp}{ext}", encoding="utf-8")
            fh.setFormatter(formatter)
            fh.setLevel(level)
            root_logger.addHandler(fh)
        except OSError:
            # read-only install location: stderr only
            pass

    has_stderr_handler = any(
        type(h) is logging.StreamHandler and getattr(h, "stream", None) is sys.stderr
        for h in root_logger.handlers
    )
    if not has_stderr_handler:
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(formatter)
        sh.setLevel(level)
        root_logger.addHandler(sh)

    # httpx logs every request at INFO, including the full URL
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(__name__)
