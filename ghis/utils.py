"""
Utility functions for the health impact simulator

Provides logging, fingerprint hashing, and the exception hierarchy
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure logging for GHIS"""
    level = getattr(logging, log_level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# HASHING
# ═══════════════════════════════════════════════════════════════════

def compute_string_hash(content: str) -> str:
    """Compute SHA-256 hash of string"""
    return hashlib.sha256(content.encode()).hexdigest()


def compute_payload_hash(payload: Any) -> str:
    """Compute SHA-256 hash of a JSON-serializable payload.

    Keys are sorted so logically equal dicts hash identically.
    """
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return compute_string_hash(canonical)


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class GHISError(Exception):
    """Base exception for GHIS"""
    pass


class InvalidInputError(GHISError):
    """Simulation request rejected before computation"""
    pass


class SimulationIntegrityError(GHISError):
    """Computed output failed its range or finiteness checks"""
    pass
