"""
Tests for the nibble-packed color map codec.
"""

import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from queens_engine import G, pack_color_map, unpack_color_map, generate_one_board


def test_pack_high_nibble_first():
    assert pack_color_map(G([[1, 2], [3, 4]])) == bytes([0x12, 0x34])


def test_odd_size_pads_last_low_nibble():
    cmap = np.arange(25).reshape(5, 5) % 5
    data = pack_color_map(cmap)

    assert len(data) == 13
    assert data[-1] & 0x0F == 0
    assert data[-1] >> 4 == cmap[4, 4]


@pytest.mark.parametrize("n", range(4, 11))
def test_generated_boards_survive_storage(n):
    board = generate_one_board(n, np.random.default_rng(n))

    data = pack_color_map(board.colors)

    assert len(data) == (n * n + 1) // 2
    assert np.array_equal(unpack_color_map(data, n), board.colors)


def test_colors_outside_nibble_rejected():
    with pytest.raises(ValueError):
        pack_color_map(G([[0, 16], [1, 2]]))
    with pytest.raises(ValueError):
        pack_color_map(G([[0, -1], [1, 2]]))


def test_payload_size_mismatch_rejected():
    with pytest.raises(ValueError):
        unpack_color_map(bytes([0x12, 0x34]), 3)
