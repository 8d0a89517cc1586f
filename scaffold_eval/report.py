import os
import json
import logging

from .allocator import TOTAL_UNITS, allocation_share

logger = logging.getLogger(__name__)


def top_projects(projects, allocations, top=5):
    """(project, allocation) pairs, largest allocation first; input order breaks ties."""
    ranked = sorted(zip(projects, allocations), key=lambda pa: pa[1], reverse=True)
    return ranked[:top]


def print_evaluation_summary(projects, allocations, total_units=TOTAL_UNITS, top=5):
    logger.info("=== Evaluation Summary ===")
    logger.info(f"Total projects: {len(projects)}")
    logger.info(f"Total allocation: {sum(allocations)}")
    logger.info(f"Top {min(top, len(projects))} projects:")
    for i, (project, alloc) in enumerate(top_projects(projects, allocations, top), start=1):
        logger.info(f" {i}. {project.name} ({project.category}): {alloc} "
                    f"({allocation_share(alloc, total_units)}%)")


def build_allocation_output(projects, allocations, metadata, settings, total_units=TOTAL_UNITS, tx=None):
    output = {
        "description": metadata.description,
        "pool_id": settings.pool_id,
        "chain_id": metadata.chain_id,
        "scaffold": settings.scaffold_address,
        "evaluator": metadata.submitter,
        "total_units": total_units,
        "allocations": [
            {
                "project": p.name,
                "category": p.category,
                "recipient": p.recipient_address,
                "votes_pct": str(p.vote_percentage),
                "op_received": str(p.op_received),
                "allocation": alloc,
            }
            for p, alloc in zip(projects, allocations)
        ],
    }
    if tx is not None:
        output["transaction"] = tx._asdict()
    return output


def save_allocation_output(output, path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(output, f, indent=2)
    logger.info(f"✅ Allocations written to {path}")
