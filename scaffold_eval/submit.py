import json
import logging
from typing import NamedTuple
from eth_abi import encode
from eth_account import Account
from web3 import Web3

from .allocator import check_allocations
from .errors import AllocationInvariantError, ConfigError, SubmissionError

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
UINT32_MAX = 2**32 - 1

# (description, allocations, placeholder, chainId, evaluator)
EVALUATION_TYPES = ["string", "uint32[]", "address", "uint256", "address"]


class EvaluationMetadata(NamedTuple):
    description: str
    chain_id: int
    submitter: str


class TransactionResult(NamedTuple):
    tx_hash: str
    block_number: int
    gas_used: int
    status: int


def build_metadata(settings, submitter):
    return EvaluationMetadata(
        description=settings.round_label,
        chain_id=settings.chain_id,
        submitter=Web3.to_checksum_address(submitter),
    )


def load_account(settings):
    if not settings.private_key:
        raise ConfigError("PRIVATE_KEY environment variable is required")
    try:
        return Account.from_key(settings.private_key)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"PRIVATE_KEY is not a valid private key: {e}",
                          hint="Check the PRIVATE_KEY value in your .env") from e


def load_abi(path):
    with open(path) as f:
        return json.load(f)


def get_web3_and_contract(settings):
    w3 = Web3(Web3.HTTPProvider(settings.rpc_url, request_kwargs={"timeout": settings.rpc_timeout}))
    if not w3.is_connected():
        raise SubmissionError(f"Failed to connect to RPC node at {settings.rpc_url}",
                              hint="Check RPC_URL or use a different RPC provider")
    try:
        contract = w3.eth.contract(
            address=w3.to_checksum_address(settings.scaffold_address),
            abi=load_abi(settings.abi_path),
        )
    except Exception as e:
        raise SubmissionError(f"Failed to load ABI or create contract: {e}",
                              hint="Check SCAFFOLD_ADDRESS and SCAFFOLD_ABI_PATH") from e
    return w3, contract


def encode_evaluation_data(allocations, metadata):
    """ABI-encode the evaluate() payload. Returns bytes."""
    out_of_range = [a for a in allocations if a < 0 or a > UINT32_MAX]
    if out_of_range:
        raise AllocationInvariantError(f"Allocations do not fit uint32: {out_of_range}")
    return encode(
        EVALUATION_TYPES,
        [
            metadata.description,
            list(allocations),
            ZERO_ADDRESS,
            metadata.chain_id,
            metadata.submitter,
        ],
    )


def submit(allocations, metadata, settings, total_units, account=None, w3=None, contract=None):
    """
    Send ScaffoldIE.evaluate(poolId, data, caller) once and wait for the receipt.
    Any failure along the way comes back as a SubmissionError.
    """
    check_allocations(allocations, total_units)
    data = encode_evaluation_data(allocations, metadata)
    logger.info(f"ℹ️ Evaluation data encoded ({len(data)} bytes, {len(allocations)} allocations)")

    if account is None:
        account = load_account(settings)
    if w3 is None or contract is None:
        w3, contract = get_web3_and_contract(settings)

    logger.info(f"ℹ️ Executing evaluate on pool {settings.pool_id} from {account.address}")
    try:
        tx = contract.functions.evaluate(settings.pool_id, data, account.address).build_transaction({
            "from": account.address,
            "chainId": settings.chain_id,
            "gas": settings.gas_limit,
            "nonce": w3.eth.get_transaction_count(account.address),
        })
        signed = account.sign_transaction(tx)
        sent = w3.eth.send_raw_transaction(signed.raw_transaction)
    except Exception as e:
        raise SubmissionError(f"Failed to send evaluate transaction: {e}") from e

    tx_hash = Web3.to_hex(sent)
    logger.info(f"ℹ️ Sent evaluate tx {tx_hash}, waiting for receipt…")
    try:
        receipt = w3.eth.wait_for_transaction_receipt(sent, timeout=settings.rpc_timeout)
    except Exception as e:
        raise SubmissionError(f"No receipt for {tx_hash}: {e}", tx_hash=tx_hash) from e

    if receipt["status"] != 1:
        raise SubmissionError(
            f"evaluate transaction {tx_hash} reverted",
            hint="Check contract state, permissions, and data format",
            tx_hash=tx_hash,
        )

    result = TransactionResult(
        tx_hash=tx_hash,
        block_number=receipt["blockNumber"],
        gas_used=receipt["gasUsed"],
        status=receipt["status"],
    )
    logger.info(f"✅ Evaluation confirmed in block {result.block_number}, gas used {result.gas_used}")
    return result
