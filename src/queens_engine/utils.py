"""
Utility functions for the Queens Engine.
"""

import numpy as np
import json
import hashlib
from typing import Dict
from pathlib import Path
from datetime import datetime
from .types import Grid, Board, STAR, INVALID, ERROR


MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 10


def G(lst) -> Grid:
    """Convert list to Grid (numpy array)."""
    return np.array(lst, dtype=int)


def in_size_range(n: int) -> bool:
    return MIN_BOARD_SIZE <= n <= MAX_BOARD_SIZE


_STATUS_GLYPH = {STAR: "*", INVALID: "x", ERROR: "!"}


def format_board(board: Board, show_status: bool = True) -> str:
    """
    Render a board as text, one row per line.

    Each cell shows its color as a base-36 digit; with show_status, stars,
    invalid and error cells are shown as '*', 'x' and '!'.
    """
    lines = []
    for r in range(board.n):
        row = []
        for c in range(board.n):
            cell = board.cell(r, c)
            glyph = np.base_repr(cell.color, 36).lower()
            if show_status:
                glyph = _STATUS_GLYPH.get(cell.player_status, glyph)
            row.append(glyph)
        lines.append(" ".join(row))
    return "\n".join(lines)


# ==============================================================================
# Hash functions for receipts
# ==============================================================================

def board_sha(cmap) -> str:
    """
    Compute SHA-256 hash of a color map for board identification.

    Args:
        cmap: n×n color map (Grid or nested lists)

    Returns:
        Hex string of SHA-256 hash
    """
    payload = {"colors": np.asarray(cmap, dtype=int).tolist()}
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


# ==============================================================================
# Receipt logging
# ==============================================================================

def log_receipt(record: Dict, out_dir: str = None) -> None:
    """
    Write receipt record to JSONL file.

    Args:
        record: Dictionary with receipt data
        out_dir: Output directory (default: runs/YYYY-MM-DD)
    """
    if out_dir is None:
        date_str = datetime.now().strftime("%Y-%m-%d")
        out_dir = f"runs/{date_str}"

    Path(out_dir).mkdir(parents=True, exist_ok=True)
    receipt_path = Path(out_dir) / "receipts.jsonl"

    with open(receipt_path, "a") as f:
        f.write(json.dumps(record, sort_keys=True) + "\n")
