"""Tests for the PNG frames directory and ffmpeg backed WEBM encoders."""

from __future__ import annotations

import subprocess
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from hilbert_anim.config import AnimationConfig
from hilbert_anim.driver import AnimationDriver
from hilbert_anim.encoders import EncodingError
from hilbert_anim.encoders import webm as webm_module
from hilbert_anim.encoders.frames import FramesDirectoryEncoder, frame_filename
from hilbert_anim.encoders.webm import WebmEncoder, ffmpeg_command
from hilbert_anim.utilities.env import RenderStrategy


def _frames(config: AnimationConfig) -> list[np.ndarray]:
    return list(AnimationDriver(config, strategy=RenderStrategy.SERIAL).run())


class TestFramesDirectoryEncoder:
    """Group frame directory tests so PNG sequences stay numbered and lossless."""

    def test_writes_numbered_pngs(self, tmp_path: Path) -> None:
        config = AnimationConfig.create(order=3, frame_count=3, output_path=tmp_path / "out")
        frames = _frames(config)

        result = FramesDirectoryEncoder().encode(frames, config)

        assert sorted(p.name for p in result.iterdir()) == [
            "frame_00000.png",
            "frame_00001.png",
            "frame_00002.png",
        ]
        for index, expected in enumerate(frames):
            with Image.open(result / frame_filename(index)) as image:
                assert np.array_equal(np.asarray(image.convert("RGB")), expected)

    def test_replaces_frames_from_an_earlier_run(self, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        (out_dir / "frame_00007.png").write_bytes(b"old")
        config = AnimationConfig.create(order=2, frame_count=1, output_path=out_dir)

        FramesDirectoryEncoder().encode(_frames(config), config)

        assert [p.name for p in out_dir.iterdir()] == ["frame_00000.png"]

    @pytest.mark.parametrize("stray", ["notes.txt", "stale.png", "nested"])
    def test_refuses_to_replace_a_directory_with_other_files(
        self, tmp_path: Path, stray: str
    ) -> None:
        """Verify pointing the tool at an unrelated directory never deletes anything."""
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        (out_dir / "frame_00000.png").write_bytes(b"old")
        if stray == "nested":
            (out_dir / stray).mkdir()
        else:
            (out_dir / stray).write_bytes(b"keep me")
        config = AnimationConfig.create(order=2, frame_count=1, output_path=out_dir)

        with pytest.raises(EncodingError, match="refusing"):
            FramesDirectoryEncoder().encode(_frames(config), config)

        assert sorted(p.name for p in out_dir.iterdir()) == sorted(
            ["frame_00000.png", stray]
        )

    def test_reuses_an_empty_directory(self, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        config = AnimationConfig.create(order=2, frame_count=2, output_path=out_dir)

        FramesDirectoryEncoder().encode(_frames(config), config)

        assert len(list(out_dir.iterdir())) == 2

    def test_empty_frame_stream_is_an_encoding_error(self, tmp_path: Path) -> None:
        config = AnimationConfig.create(order=2, output_path=tmp_path / "out")

        with pytest.raises(EncodingError):
            FramesDirectoryEncoder().encode([], config)


class TestWebmEncoder:
    """Group WEBM tests so ffmpeg receives the expected frame sequence and flags."""

    def test_builds_ffmpeg_command(self, tmp_path: Path) -> None:
        config = AnimationConfig.create(
            order=2,
            framerate=24,
            loop_count=3,
            bitrate="2M",
            output_path=tmp_path / "anim.webm",
        )

        cmd = ffmpeg_command(
            config, tmp_path / "frames", executable="ffmpeg", codec="libvpx-vp9"
        )

        assert cmd == [
            "ffmpeg",
            "-y",
            "-framerate", "24",
            "-stream_loop", "2",
            "-pattern_type", "glob",
            "-i", str(tmp_path / "frames" / "frame_*.png"),
            "-c:v", "libvpx-vp9",
            "-b:v", "2M",
            str(tmp_path / "anim.webm"),
        ]

    def test_command_omits_bitrate_when_unset(self, tmp_path: Path) -> None:
        config = AnimationConfig.create(order=2, output_path=tmp_path / "anim.webm")

        cmd = ffmpeg_command(config, tmp_path, executable="ffmpeg", codec="libvpx-vp9")

        assert "-b:v" not in cmd

    def test_runs_ffmpeg_over_written_frames(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify ffmpeg sees every frame and the scratch directory is removed afterwards."""
        config = AnimationConfig.create(
            order=2, frame_count=3, output_path=tmp_path / "anim.webm"
        )
        calls: list[dict[str, object]] = []

        def fake_run(cmd, **kwargs):
            pattern = Path(cmd[cmd.index("-i") + 1])
            calls.append(
                {"cmd": cmd, "frames": sorted(p.name for p in pattern.parent.glob("*.png"))}
            )
            Path(cmd[-1]).write_bytes(b"webm")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr(webm_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(webm_module.subprocess, "run", fake_run)

        result = WebmEncoder().encode(_frames(config), config)

        assert result == config.output_path
        assert result.read_bytes() == b"webm"
        assert len(calls) == 1
        assert calls[0]["frames"] == [frame_filename(i) for i in range(3)]
        assert not Path(calls[0]["cmd"][calls[0]["cmd"].index("-i") + 1]).parent.exists()

    def test_ffmpeg_failure_is_an_encoding_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = AnimationConfig.create(
            order=2, frame_count=1, output_path=tmp_path / "anim.webm"
        )

        def failing_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd, stderr="bad codec")

        monkeypatch.setattr(webm_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(webm_module.subprocess, "run", failing_run)

        with pytest.raises(EncodingError, match="status 1"):
            WebmEncoder().encode(_frames(config), config)

    def test_missing_ffmpeg_is_an_encoding_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HILBERT_ANIM_FFMPEG", "ffmpeg-that-does-not-exist")
        config = AnimationConfig.create(
            order=2, frame_count=1, output_path=tmp_path / "anim.webm"
        )

        with pytest.raises(EncodingError, match="not found"):
            WebmEncoder().encode(_frames(config), config)
