import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

from .errors import ConfigError

# ── Defaults (Sepolia deployment of ScaffoldIE) ──────────────────────────────────
DEFAULT_RPC_URL          = "https://sepolia.drpc.org"
DEFAULT_SCAFFOLD_ADDRESS = "0x31f0d35410f95aFAF29864c6dbd23Adfc8D28dfC"
DEFAULT_ABI_PATH         = os.path.join(os.path.dirname(__file__), "abi", "ScaffoldIE.json")
DEFAULT_CSV_FILE         = "rpgf2_results.csv"
DEFAULT_ROUND_LABEL      = "RPGF2 Round 2 Evaluation"
DEFAULT_POOL_ID          = 1
DEFAULT_CHAIN_ID         = 11155111
DEFAULT_GAS_LIMIT        = 30_000_000
DEFAULT_RPC_TIMEOUT      = 120


@dataclass(frozen=True)
class Settings:
    private_key: str = field(default=None, repr=False)
    rpc_url: str = DEFAULT_RPC_URL
    scaffold_address: str = DEFAULT_SCAFFOLD_ADDRESS
    abi_path: str = DEFAULT_ABI_PATH
    pool_id: int = DEFAULT_POOL_ID
    chain_id: int = DEFAULT_CHAIN_ID
    gas_limit: int = DEFAULT_GAS_LIMIT
    csv_file: str = DEFAULT_CSV_FILE
    round_label: str = DEFAULT_ROUND_LABEL
    rpc_timeout: int = DEFAULT_RPC_TIMEOUT


def _int_env(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}", hint=f"Fix {name} in your .env")


def load_settings(require_private_key=True, dotenv_path=None):
    """
    Read the .env file (if any) and the process environment into a Settings.
    With require_private_key, a missing PRIVATE_KEY is fatal.
    """
    load_dotenv(dotenv_path)

    private_key = os.getenv("PRIVATE_KEY") or None
    if require_private_key and not private_key:
        raise ConfigError("PRIVATE_KEY environment variable is required")

    return Settings(
        private_key=private_key,
        rpc_url=os.getenv("RPC_URL", DEFAULT_RPC_URL),
        scaffold_address=os.getenv("SCAFFOLD_ADDRESS", DEFAULT_SCAFFOLD_ADDRESS),
        abi_path=os.getenv("SCAFFOLD_ABI_PATH", DEFAULT_ABI_PATH),
        pool_id=_int_env("POOL_ID", DEFAULT_POOL_ID),
        chain_id=_int_env("CHAIN_ID", DEFAULT_CHAIN_ID),
        gas_limit=_int_env("GAS_LIMIT", DEFAULT_GAS_LIMIT),
        csv_file=os.getenv("CSV_FILE", DEFAULT_CSV_FILE),
        round_label=os.getenv("ROUND_LABEL", DEFAULT_ROUND_LABEL),
        rpc_timeout=_int_env("RPC_TIMEOUT", DEFAULT_RPC_TIMEOUT),
    )
