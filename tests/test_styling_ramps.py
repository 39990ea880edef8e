"""Tests for colour ramps and ramp sampling."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from cartostyle.styling.errors import InvalidInputError, UnknownRampError
from cartostyle.styling.models import HEX_COLOR, ColorRamp
from cartostyle.styling.ramps import COLOR_RAMPS, get_colors, load_color_ramps, sample_ramp


class TestRampTable:
    def test_builtin_ramps_present(self):
        for key in ("reds", "greens", "blues", "oranges", "purples", "viridis", "spectral", "rdylgn"):
            assert key in COLOR_RAMPS

    def test_ramp_sizes(self):
        assert len(COLOR_RAMPS["blues"]) == 7
        assert len(COLOR_RAMPS["viridis"]) == 10
        assert len(COLOR_RAMPS["rdylgn"]) == 5

    def test_spectral_runs_low_to_high(self):
        spectral = COLOR_RAMPS["spectral"].colors
        assert spectral[0] == "#5e4fa2"
        assert spectral[-1] == "#d53e4f"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            COLOR_RAMPS["mine"] = COLOR_RAMPS["reds"]  # type: ignore[index]

    def test_ramps_are_frozen(self):
        with pytest.raises(Exception):
            COLOR_RAMPS["reds"].colors = ("#000000",) * 5  # type: ignore[misc]


class TestLoadColorRamps:
    def test_load_custom_file(self, tmp_path: Path):
        path = tmp_path / "ramps.yml"
        path.write_text(yaml.dump({
            "ramps": {
                "greys": {
                    "name": "Greys",
                    "colors": ["#f7f7f7", "#cccccc", "#969696", "#636363", "#252525"],
                },
            },
        }))
        ramps = load_color_ramps(path)
        assert list(ramps) == ["greys"]
        assert ramps["greys"].name == "Greys"
        assert ramps["greys"].key == "greys"

    def test_rejects_bad_colour(self, tmp_path: Path):
        path = tmp_path / "ramps.yml"
        path.write_text(yaml.dump({
            "ramps": {"bad": {"colors": ["red", "#cccccc", "#969696", "#636363", "#252525"]}},
        }))
        with pytest.raises(ValueError):
            load_color_ramps(path)

    def test_rejects_short_ramp(self, tmp_path: Path):
        path = tmp_path / "ramps.yml"
        path.write_text(yaml.dump({"ramps": {"short": {"colors": ["#000000", "#ffffff"]}}}))
        with pytest.raises(ValueError):
            load_color_ramps(path)

    def test_rejects_empty_file(self, tmp_path: Path):
        path = tmp_path / "ramps.yml"
        path.write_text("")
        with pytest.raises(ValueError):
            load_color_ramps(path)


class TestGetColors:
    def test_full_ramp(self):
        assert get_colors("blues", 7) == list(COLOR_RAMPS["blues"].colors)

    def test_even_sampling(self):
        assert get_colors("reds", 3) == ["#fee5d9", "#fc9272", "#ef3b2c"]

    def test_single_colour_is_first_stop(self):
        assert get_colors("greens", 1) == ["#edf8e9"]

    def test_cycles_past_ramp_length(self):
        colors = get_colors("rdylgn", 7)
        ramp = COLOR_RAMPS["rdylgn"].colors
        assert colors == [ramp[0], ramp[1], ramp[2], ramp[3], ramp[4], ramp[0], ramp[1]]

    def test_unknown_ramp(self):
        with pytest.raises(UnknownRampError) as exc_info:
            get_colors("rainbow", 5)
        assert exc_info.value.context["ramp"] == "rainbow"
        assert "blues" in exc_info.value.context["available"]

    def test_zero_colours(self):
        with pytest.raises(InvalidInputError):
            get_colors("blues", 0)

    def test_custom_ramp_table(self):
        ramp = ColorRamp(
            key="mono",
            name="Mono",
            colors=("#000000", "#333333", "#666666", "#999999", "#cccccc"),
        )
        assert get_colors("mono", 2, ramps={"mono": ramp}) == ["#000000", "#666666"]
        with pytest.raises(UnknownRampError):
            get_colors("blues", 2, ramps={"mono": ramp})

    def test_every_ramp_every_count(self):
        for key, ramp in COLOR_RAMPS.items():
            for n in range(1, 16):
                colors = sample_ramp(ramp, n)
                assert len(colors) == n, key
                assert all(HEX_COLOR.match(c) for c in colors)
