"""Tests for :mod:`hilbert_anim.config`."""

from __future__ import annotations

from pathlib import Path

import pytest

from hilbert_anim import OutputFormat
from hilbert_anim.config import (LOOP_FOREVER, AnimationConfig,
                                 ConfigurationError, EnvironmentSettings,
                                 resolve_output_format)
from hilbert_anim.curve import MAX_ORDER
from hilbert_anim.utilities.env import RenderStrategy


class TestAnimationConfig:
    """Group configuration tests so invalid settings fail before rendering starts."""

    def test_defaults(self) -> None:
        config = AnimationConfig.create()

        assert config.order == 9
        assert config.function_name == "oklab_hue"
        assert config.frame_count == 256
        assert config.framerate == 30
        assert config.loop_count == 0
        assert config.bitrate is None
        assert config.output_path == Path("out.webp")
        assert config.output_format is OutputFormat.WEBP
        assert config.side_length == 512
        assert config.size == 512 * 512

    def test_unknown_function_fails_validation(self) -> None:
        """Verify unknown coloring functions are rejected with the available names."""
        with pytest.raises(ConfigurationError, match="doesnotexist") as excinfo:
            AnimationConfig.create(function_name="doesnotexist")

        assert "oklab_hue" in str(excinfo.value)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"order": 0},
            {"order": MAX_ORDER + 1},
            {"frame_count": 0},
            {"framerate": 0},
            {"loop_count": -1},
            {"loop_count": 0, "output_path": "anim.webm"},
        ],
    )
    def test_rejects_out_of_range_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ConfigurationError):
            AnimationConfig.create(**overrides)

    def test_configuration_error_is_a_value_error(self) -> None:
        assert issubclass(ConfigurationError, ValueError)

    def test_blank_bitrate_is_treated_as_unset(self) -> None:
        assert AnimationConfig.create(bitrate="").bitrate is None

    def test_config_is_immutable(self) -> None:
        config = AnimationConfig.create(order=2)

        with pytest.raises(AttributeError):
            config.order = 3  # type: ignore[misc]

    def test_configs_with_same_settings_compare_equal(self) -> None:
        assert AnimationConfig.create(order=3) == AnimationConfig.create(order=3)

    def test_loops_default_to_forever_except_for_webm(self) -> None:
        assert AnimationConfig.create(output_path="anim.gif").loop_count == LOOP_FOREVER
        assert AnimationConfig.create(output_path="anim.webm").loop_count == 1

    def test_zero_loops_means_forever(self) -> None:
        config = AnimationConfig.create(loop_count=0, output_path="anim.gif")

        assert config.loop_count == LOOP_FOREVER

    def test_order_cap_is_practical(self) -> None:
        """Verify the largest accepted order still fits a 4096x4096 raster."""
        assert MAX_ORDER == 12
        assert AnimationConfig.create(order=MAX_ORDER).side_length == 4096


class TestEnvironmentSettings:
    """Group environment tests so bad variables are caught before any frame renders."""

    def test_reads_environment_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HILBERT_ANIM_RENDER_STRATEGY", "serial")
        monkeypatch.setenv("HILBERT_ANIM_RENDER_WORKERS", "3")
        monkeypatch.setenv("HILBERT_ANIM_WEBP_QUALITY", "55")
        monkeypatch.setenv("HILBERT_ANIM_WEBM_CODEC", "libvpx")

        config = AnimationConfig.create(order=2)
        monkeypatch.setenv("HILBERT_ANIM_WEBP_QUALITY", "10")

        assert config.settings.render_strategy is RenderStrategy.SERIAL
        assert config.settings.render_workers == 3
        assert config.settings.webp_quality == 55
        assert config.settings.webm_codec == "libvpx"

    @pytest.mark.parametrize(
        ("env_var", "value"),
        [
            ("HILBERT_ANIM_WEBP_QUALITY", "abc"),
            ("HILBERT_ANIM_WEBP_QUALITY", "101"),
            ("HILBERT_ANIM_RENDER_STRATEGY", "processes"),
            ("HILBERT_ANIM_RENDER_WORKERS", "0"),
        ],
    )
    def test_invalid_environment_is_a_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch, env_var: str, value: str
    ) -> None:
        monkeypatch.setenv(env_var, value)

        with pytest.raises(ConfigurationError, match=env_var):
            EnvironmentSettings.from_environment()
        with pytest.raises(ConfigurationError, match=env_var):
            AnimationConfig.create(order=2)


class TestResolveOutputFormat:
    """Group output format tests so the encoder is picked from the path or the flag."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("anim.gif", OutputFormat.GIF),
            ("anim.WEBP", OutputFormat.WEBP),
            ("clips/anim.webm", OutputFormat.WEBM),
            ("frames_out", OutputFormat.FRAMES),
        ],
    )
    def test_format_from_extension(self, path: str, expected: OutputFormat) -> None:
        assert resolve_output_format(Path(path)) is expected

    def test_explicit_format_wins(self) -> None:
        assert resolve_output_format(Path("anim.gif"), "webp") is OutputFormat.WEBP

    def test_unknown_extension_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="mp4"):
            resolve_output_format(Path("anim.mp4"))

    def test_unknown_explicit_format_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_output_format(Path("anim.gif"), "avi")
