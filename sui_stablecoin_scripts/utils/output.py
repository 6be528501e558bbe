import json
import logging
import time
from pathlib import Path

from . import config

_LOGGER = logging.getLogger(__name__)


def write_json_output(prefix: str, output: dict) -> Path:
    """Write ``output`` to ``<logs dir>/<prefix>-<unix ms>.json``."""
    logs_dir = Path(config.LOGS_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / f"{prefix}-{int(time.time() * 1000)}.json"
    with path.open("w") as f:
        json.dump(output, f, indent=2)
    _LOGGER.info(f"Logs written to {path}")
    return path


def read_transaction_output(path) -> dict:
    with open(path) as f:
        return json.load(f)


def inspect_object(obj) -> str:
    return json.dumps(obj, indent=2, default=str)
