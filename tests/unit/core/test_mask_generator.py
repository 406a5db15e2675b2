"""Unit tests for the background mask description."""
from __future__ import annotations

import pytest

from gifzoom.core.services.mask_generator import MaskSpec, generate_mask


class TestGenerateMask:
    def test_matches_output_geometry(self):
        mask = generate_mask(600, 338, 16)
        assert mask == MaskSpec(width=600, height=338, radius=16)

    def test_shares_video_aspect_ratio(self):
        mask = generate_mask(600, 338, 16)
        assert mask.aspect_ratio == pytest.approx(600 / 338)

    def test_radius_capped_at_half_short_side(self):
        assert generate_mask(100, 40, 64).radius == 20

    def test_negative_radius_becomes_square(self):
        assert generate_mask(100, 40, -5).radius == 0

    def test_degenerate_size_is_clamped(self):
        mask = generate_mask(0, 0, 16)
        assert (mask.width, mask.height) == (1, 1)
