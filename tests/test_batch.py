"""Tests for parallel batch analysis."""

import pandas as pd

from enforcer.core.config import BatchConfig, EnforcerConfig
from enforcer.pipeline.batch import (
    BatchAnalysisResult,
    FileAnalysisResult,
    analyze_directory,
    analyze_frame_files,
)


def _write_frames(path, frames: int = 120, sdi_burst: bool = False):
    """Write a single-player box frame table to disk."""
    xs = ([0.0] * 10 + [0.5] + [1.0] * 10) * (frames // 21 + 1)
    xs = xs[:frames]
    if sdi_burst:
        xs += [0.0, 1.0, 0.0, 1.0] + [0.0] * 10
    df = pd.DataFrame(
        {
            "frame": range(len(xs)),
            "player_index": 0,
            "joystick_x": xs,
            "joystick_y": 0.0,
            "cstick_x": 0.0,
            "cstick_y": 0.0,
            "action_state_id": 14,
        }
    )
    df.to_csv(path, index=False)
    return path


def _write_broken(path):
    pd.DataFrame({"frame": [0, 1], "player_index": [0, 0]}).to_csv(path, index=False)
    return path


class TestAnalyzeFrameFiles:
    """Tests for analyze_frame_files."""

    def test_failures_do_not_abort_batch(self, tmp_path):
        good = _write_frames(tmp_path / "good.csv")
        bad = _write_broken(tmp_path / "bad.csv")

        result = analyze_frame_files([good, bad], max_workers=2)

        assert result.total_files == 2
        assert result.successful == 1
        assert result.failed == 1
        assert result.success_rate == 50.0

        by_path = {r.path: r for r in result.results}
        assert by_path[str(good)].analysis is not None
        assert by_path[str(bad)].analysis is None
        assert "missing required columns" in by_path[str(bad)].error_message

    def test_missing_file_is_a_failure(self, tmp_path):
        result = analyze_frame_files([tmp_path / "nope.csv"])
        assert result.failed == 1
        assert result.results[0].success is False

    def test_empty_input(self):
        result = analyze_frame_files([])
        assert result.total_files == 0
        assert result.success_rate == 0.0
        assert result.results == []

    def test_progress_callback(self, tmp_path):
        paths = [_write_frames(tmp_path / f"g{i}.csv") for i in range(3)]
        seen = []
        analyze_frame_files(paths, max_workers=3, progress_callback=seen.append)
        assert len(seen) == 3
        assert all(isinstance(r, FileAnalysisResult) for r in seen)

    def test_flagged(self, tmp_path):
        clean = _write_frames(tmp_path / "clean.csv")
        dirty = _write_frames(tmp_path / "dirty.csv", sdi_burst=True)
        result = analyze_frame_files([clean, dirty])
        assert [r.path for r in result.flagged] == [str(dirty)]

    def test_skip_handwarmers(self, tmp_path):
        path = _write_frames(tmp_path / "warmup.csv")
        config = EnforcerConfig(batch=BatchConfig(max_workers=1, skip_handwarmers=True))
        result = analyze_frame_files([path], config=config)
        assert result.successful == 1
        assert result.results[0].skipped
        assert result.flagged == []


class TestAnalyzeDirectory:
    """Tests for directory discovery."""

    def test_finds_frame_tables(self, tmp_path):
        _write_frames(tmp_path / "a.csv")
        nested = tmp_path / "set1"
        nested.mkdir()
        _write_frames(nested / "b.csv")
        (tmp_path / "notes.txt").write_text("ignored")

        assert analyze_directory(tmp_path).total_files == 2
        assert analyze_directory(tmp_path, recursive=False).total_files == 1


class TestSerialization:
    """Tests for to_dict output."""

    def test_batch_to_dict(self, tmp_path):
        good = _write_frames(tmp_path / "good.csv")
        bad = _write_broken(tmp_path / "bad.csv")
        data = analyze_frame_files([good, bad]).to_dict()

        assert data["total_files"] == 2
        assert data["success_rate"] == 50.0
        assert len(data["results"]) == 2
        for entry in data["results"]:
            if entry["success"]:
                assert entry["analysis"]["players"]["0"]["controller_type"] == "box"
            else:
                assert entry["analysis"] is None
                assert entry["error_message"]

    def test_success_rate_rounding(self):
        result = BatchAnalysisResult(
            total_files=3, successful=2, failed=1, total_duration_seconds=0.1
        )
        assert result.success_rate == 66.7
