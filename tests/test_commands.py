"""
Tests for DeduplicationCommand — the single entry point used by CLI and library callers.
"""
import pytest

from twinfind.commands import DeduplicationCommand
from twinfind.core.models import HashAlgorithmName, ScanParams, Stage


class TestDeduplicationCommand:
    def test_finds_expected_groups(self, test_files, temp_dir):
        groups, metrics = DeduplicationCommand().execute(ScanParams(root_dir=str(temp_dir), max_workers=2))

        group_sets = {frozenset(g.paths) for g in groups}
        assert group_sets == {
            frozenset({str(test_files["dup1_a"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])}),
            frozenset({str(test_files["dup2_a"]), str(test_files["dup2_b"])}),
        }
        # Largest group size first
        assert [g.size for g in groups] == [2048, 1024]

        assert metrics.total_files == 8
        assert metrics.candidate_groups == 2
        assert metrics.partial_groups == 2
        assert metrics.duplicate_groups == 2
        assert metrics.duplicate_files == 5
        assert metrics.reclaimable_bytes == 2048 + 2 * 1024

    @pytest.mark.parametrize("algorithm", list(HashAlgorithmName))
    def test_every_algorithm_gives_same_groups(self, test_files, temp_dir, algorithm):
        baseline, _ = DeduplicationCommand().execute(ScanParams(root_dir=str(temp_dir)))
        groups, _ = DeduplicationCommand().execute(ScanParams(root_dir=str(temp_dir), algorithm=algorithm))
        assert {frozenset(g.paths) for g in groups} == {frozenset(g.paths) for g in baseline}

    def test_timings_are_consistent(self, test_files, temp_dir):
        _, metrics = DeduplicationCommand().execute(ScanParams(root_dir=str(temp_dir)))
        stages = metrics.time_stage1_secs + metrics.time_stage2_secs + metrics.time_stage3_secs
        assert all(t >= 0 for t in (metrics.time_stage1_secs, metrics.time_stage2_secs,
                                    metrics.time_stage3_secs))
        assert metrics.time_total_secs >= stages

    def test_scanned_files_kept_on_command(self, test_files, temp_dir):
        command = DeduplicationCommand()
        command.execute(ScanParams(root_dir=str(temp_dir)))
        assert len(command.files) == 8

    def test_missing_root_propagates(self, temp_dir):
        with pytest.raises(RuntimeError):
            DeduplicationCommand().execute(ScanParams(root_dir=str(temp_dir / "missing")))

    def test_progress_reports_every_stage(self, test_files, temp_dir):
        stages = set()
        DeduplicationCommand().execute(
            ScanParams(root_dir=str(temp_dir)),
            progress_callback=lambda stage, current, total: stages.add(stage)
        )
        assert stages == {s.value for s in Stage.get_all()}
