"""Shared fixtures: sample round CSVs and fake web3 collaborators."""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from web3 import Web3

from scaffold_eval.config import Settings
from scaffold_eval.load_projects import ProjectRecord

# Well-known throwaway key from the web3 docs; never funded.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

SAMPLE_CSV = (
    "Project Name,Category,% of votes received,OP Received\n"
    'Alpha,DeFi,5.5730,"1,234.5"\n'
    "Beta,,2.0,\n"
    ",Tooling,1.0,10\n"
    "Gamma,Infra,abc,10\n"
    "Delta,Infra,0,10\n"
    "Alpha,DeFi,3.0,10\n"
    "Epsilon,Infra,1.5,n/a\n"
)


def make_project(name, pct, category="DeFi"):
    return ProjectRecord(
        name=name,
        category=category,
        vote_percentage=Decimal(str(pct)),
        op_received=Decimal(0),
        recipient_address="0x" + "11" * 20,
    )


@pytest.fixture
def settings():
    """Settings with a test key and default endpoints."""
    return Settings(private_key=TEST_PRIVATE_KEY)


@pytest.fixture
def sample_csv(tmp_path):
    """Round results CSV mixing valid and invalid rows."""
    path = tmp_path / "rpgf2_results.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


class FakeEvaluateCall:
    def __init__(self, contract, args):
        self.contract = contract
        self.args = args

    def build_transaction(self, params):
        self.contract.built.append(params)
        tx = {"to": self.contract.address, "value": 0, "data": "0x", "gasPrice": 10**9}
        tx.update(params)
        return tx


class FakeContract:
    """Stand-in for a bound ScaffoldIE contract."""

    def __init__(self, address="0x31f0d35410f95afaf29864c6dbd23adfc8d28dfc"):
        self.address = Web3.to_checksum_address(address)
        self.evaluate_calls = []
        self.built = []
        self.functions = SimpleNamespace(evaluate=self._evaluate)

    def _evaluate(self, pool_id, data, caller):
        self.evaluate_calls.append((pool_id, data, caller))
        return FakeEvaluateCall(self, (pool_id, data, caller))


class FakeEth:
    def __init__(self, receipt=None, send_error=None, receipt_error=None):
        self.receipt = receipt if receipt is not None else {"status": 1, "blockNumber": 123, "gasUsed": 456789}
        self.send_error = send_error
        self.receipt_error = receipt_error
        self.sent = []

    def get_transaction_count(self, address):
        return 7

    def send_raw_transaction(self, raw):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(raw)
        return b"\xab" * 32

    def wait_for_transaction_receipt(self, tx_hash, timeout=None):
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt


class FakeAccount:
    address = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"

    def __init__(self):
        self.signed = []

    def sign_transaction(self, tx):
        self.signed.append(tx)
        return SimpleNamespace(raw_transaction=b"signed-raw-tx")


@pytest.fixture
def fake_contract():
    return FakeContract()


@pytest.fixture
def fake_w3():
    return SimpleNamespace(eth=FakeEth())


@pytest.fixture
def fake_account():
    return FakeAccount()
