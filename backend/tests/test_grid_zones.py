"""Tests for fishing-ground grid classification (EC30 cells)."""
from __future__ import annotations

from common.types import Coordinate
from zones import FISHING_GROUNDS, classify_grid, unreachable_cells


def _at(lat: float, lng: float) -> Coordinate:
    return Coordinate(latitude=lat, longitude=lng)


def _ground(prefix: str):
    return next(g for g in FISHING_GROUNDS if g.code_prefix == prefix)


class TestClassifyGrid:
    def test_center_of_tonkin_gulf(self):
        result = classify_grid(_at(21.0, 107.0))

        assert result.cell_code == "V11"
        assert result.cell_number == 11
        assert result.ground_name == "Ngư Trường Vinh Bắc Bộ (Tonkin Gulf)"
        assert result.zone == "Ngư Trường Vinh Bắc Bộ (Tonkin Gulf) - EC30 V11"
        assert result.region_short_name == "Vinh Bắc Bộ"
        assert result.area_km2 == 18000

    def test_lower_corner_is_first_cell(self):
        assert classify_grid(_at(20.0, 106.0)).cell_code == "V01"

    def test_upper_corner_is_clamped_to_cell_count(self):
        assert classify_grid(_at(22.0, 108.0)).cell_code == "V20"

    def test_non_square_ground(self):
        # Trung Bộ: 15 cells, 3x3 grid
        result = classify_grid(_at(16.0, 108.5))
        assert result.cell_code == "T05"
        assert result.region_short_name == "Trung Bộ"

    def test_spratly_ground(self):
        assert classify_grid(_at(9.5, 112.5)).cell_code == "S25"

    def test_outside_all_grounds(self):
        coord = _at(0.0, 0.0)
        result = classify_grid(coord)

        assert result.cell_code == "XX00"
        assert result.zone == "Outside Vietnam Waters"
        assert result.region_short_name == "International Waters"
        assert result.area_km2 == 0
        assert result.coordinate == coord

    def test_classification_is_repeatable(self):
        coord = _at(10.2, 106.3)
        assert classify_grid(coord) == classify_grid(coord)

    def test_code_number_always_in_range(self):
        for ground in FISHING_GROUNDS:
            b = ground.bounds
            for lat in (b.min_lat, (b.min_lat + b.max_lat) / 2, b.max_lat):
                for lng in (b.min_lng, (b.min_lng + b.max_lng) / 2, b.max_lng):
                    result = classify_grid(_at(lat, lng))
                    if result.ground_name != ground.name:
                        continue  # claimed by an earlier ground
                    assert 1 <= result.cell_number <= ground.cell_count
                    assert result.cell_code == f"{ground.code_prefix}{result.cell_number:02d}"


class TestUnreachableCells:
    def test_square_count_has_no_gap(self):
        assert unreachable_cells(_ground("D")) == 0

    def test_non_square_counts_report_gap(self):
        assert unreachable_cells(_ground("T")) == 6
        assert unreachable_cells(_ground("V")) == 4
        assert unreachable_cells(_ground("S")) == 11
