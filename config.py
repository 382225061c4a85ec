import os
import sys
import getpass
import logging
from datetime import datetime, timezone
from typing import Dict, Any

from dotenv import load_dotenv

from constants import DEFAULT_LOG_LEVEL, LOG_FORMAT
from curve import P256

# Load environment variables from .env file if available
load_dotenv()

# --------------------------
# Configuration and logging
# --------------------------
def load_config() -> Dict[str, Any]:
    """Load configuration from environment variables"""
    cfg = {}

    # The curve is fixed; components still receive it explicitly
    cfg["curve"] = P256

    audit_path = os.environ.get('MPDH_AUDIT_LOG')
    cfg["audit_log"] = os.path.expanduser(audit_path) if audit_path else None

    level = os.environ.get('MPDH_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"MPDH_LOG_LEVEL has unknown level name: {level}")
    cfg["log_level"] = level

    return cfg

def configure_logging(cfg: Dict[str, Any]) -> None:
    """Send diagnostics to stderr at the configured level"""
    logging.basicConfig(stream=sys.stderr, level=cfg.get("log_level", DEFAULT_LOG_LEVEL),
                        format=LOG_FORMAT)

def audit_log(cfg: Dict[str, Any], message: str) -> None:
    """Write audit log entry with timestamp"""
    log_path = cfg.get("audit_log")
    if not log_path:
        return
    timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    try:
        # Ensure log directory exists
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        with open(log_path, "a") as f:
            f.write(f"{timestamp} {message}\n")
    except OSError as e:
        print(f"Warning: Failed to write audit log: {e}", file=sys.stderr)

def get_current_user() -> str:
    """Get current username safely"""
    try:
        return os.getlogin()
    except OSError:
        return getpass.getuser()
