"""Summary and output file tests."""

import json
import logging

from conftest import make_project
from scaffold_eval.report import (
    build_allocation_output,
    print_evaluation_summary,
    save_allocation_output,
    top_projects,
)
from scaffold_eval.submit import EvaluationMetadata, TransactionResult


def test_top_projects_orders_by_allocation():
    """Test ranking is by allocation with input order breaking ties."""
    projects = [make_project("A", 1), make_project("B", 5), make_project("C", 5), make_project("D", 2)]
    ranked = top_projects(projects, [100, 400, 400, 100], top=3)
    assert [p.name for p, _ in ranked] == ["B", "C", "A"]


def test_summary_logs_totals(caplog):
    """Test the summary lists totals and the largest recipients."""
    projects = [make_project("Small", 1), make_project("Big", 3)]
    with caplog.at_level(logging.INFO):
        print_evaluation_summary(projects, [250000, 750000])

    assert "Total projects: 2" in caplog.text
    assert "Total allocation: 1000000" in caplog.text
    assert "1. Big (DeFi): 750000 (75.0000%)" in caplog.text


def test_output_includes_transaction(settings, tmp_path):
    """Test the JSON artifact carries per-project rows and the receipt."""
    projects = [make_project("Only", "5.5730")]
    metadata = EvaluationMetadata("RPGF2 Round 2 Evaluation", 11155111, "0x" + "22" * 20)
    tx = TransactionResult("0x" + "ab" * 32, 10, 21000, 1)

    output = build_allocation_output(projects, [1_000_000], metadata, settings, tx=tx)
    path = tmp_path / "nested" / "evaluation.json"
    save_allocation_output(output, str(path))

    data = json.loads(path.read_text())
    assert data["allocations"][0] == {
        "project": "Only",
        "category": "DeFi",
        "recipient": "0x" + "11" * 20,
        "votes_pct": "5.5730",
        "op_received": "0",
        "allocation": 1_000_000,
    }
    assert data["transaction"]["gas_used"] == 21000
