"""
Environment driven settings. A ``.env`` file in the working directory is loaded first.
"""
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

ROOT = Path.cwd()

RPC_URL = os.environ.get("RPC_URL", "http://127.0.0.1:9000")
FAUCET_URL = os.environ.get("FAUCET_URL", "http://127.0.0.1:9123")
EXPLORER_URL = os.environ.get("EXPLORER_URL", "")

LOGS_DIR = Path(os.environ.get("LOGS_DIR", ROOT / "logs"))
MOVE_PACKAGES_DIR = Path(os.environ.get("MOVE_PACKAGES_DIR", ROOT / "packages"))
SUI_CLIENT_CONFIG = Path(
    os.environ.get("SUI_CLIENT_CONFIG", Path.home() / ".sui" / "sui_config" / "client.yaml")
)

# in MIST
GAS_BUDGET = int(os.environ.get("GAS_BUDGET", 1_000_000_000))
TX_WAIT_TIMEOUT = float(os.environ.get("TX_WAIT_TIMEOUT", 60))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

DEPLOYER_PRIVATE_KEY = os.environ.get("DEPLOYER_PRIVATE_KEY")
BLOCKLISTER_PRIVATE_KEY = os.environ.get("BLOCKLISTER_PRIVATE_KEY")
PAUSER_PRIVATE_KEY = os.environ.get("PAUSER_PRIVATE_KEY")
