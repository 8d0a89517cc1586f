import csv
import os
import logging
from decimal import Decimal, InvalidOperation
from typing import NamedTuple
from web3 import Web3

from .errors import InvalidSourceError, SourceNotFoundError

logger = logging.getLogger(__name__)

# Columns of the round results export
NAME_COL     = "Project Name"
PERCENT_COL  = "% of votes received"
CATEGORY_COL = "Category"
OP_COL       = "OP Received"

DEFAULT_CATEGORY = "Uncategorized"


class ProjectRecord(NamedTuple):
    name: str
    category: str
    vote_percentage: Decimal
    op_received: Decimal
    recipient_address: str


def derive_recipient_address(name):
    """
    Deterministic placeholder address for a project: the first 20 bytes of
    keccak256(name), checksummed.
    """
    if not name or not isinstance(name, str):
        raise ValueError("Project name must be a non-empty string")
    digest = Web3.keccak(text=name)
    return Web3.to_checksum_address(digest[:20])


def parse_decimal(value):
    """Decimal from a CSV cell, tolerating thousands separators. None if unparseable."""
    if value is None:
        return None
    cleaned = str(value).replace(",", "").strip()
    if not cleaned:
        return None
    try:
        d = Decimal(cleaned)
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def _read_rows(path):
    """Yield (line number, row dict) pairs; decoding and CSV syntax errors become InvalidSourceError."""
    with open(path, newline="", encoding="utf-8-sig") as f:
        try:
            for line_no, row in enumerate(csv.DictReader(f), start=2):
                yield line_no, row
        except (UnicodeDecodeError, csv.Error) as e:
            raise InvalidSourceError(f"Cannot read CSV file '{path}': {e}") from e


def iter_projects(path):
    """Yield one ProjectRecord per valid row, skipping (and logging) the rest."""
    if not os.path.isfile(path):
        raise SourceNotFoundError(f"CSV file '{path}' not found")

    seen = set()
    for line_no, row in _read_rows(path):
        name = (row.get(NAME_COL) or "").strip()
        votes_received = row.get(PERCENT_COL)

        if not name or not (votes_received or "").strip():
            logger.warning(f"⚠️ Skipping invalid row {line_no}: {dict(row)}")
            continue

        percentage = parse_decimal(votes_received)
        if percentage is None or percentage <= 0:
            logger.warning(f"⚠️ Invalid percentage for {name}: {votes_received}")
            continue

        if name in seen:
            logger.warning(f"⚠️ Duplicate project {name} on row {line_no}, skipping")
            continue
        seen.add(name)

        op_raw = row.get(OP_COL)
        op_received = parse_decimal(op_raw)
        if op_received is None:
            if op_raw and op_raw.strip():
                logger.warning(f"⚠️ Unparseable OP Received for {name}: {op_raw}, using 0")
            op_received = Decimal(0)

        yield ProjectRecord(
            name=name,
            category=(row.get(CATEGORY_COL) or "").strip() or DEFAULT_CATEGORY,
            vote_percentage=percentage,
            op_received=op_received,
            recipient_address=derive_recipient_address(name),
        )


def load_projects(path):
    projects = list(iter_projects(path))
    logger.info(f"ℹ️ Parsed {len(projects)} projects from {path}")
    return projects
