"""Tests for shared type definitions."""

from pigen_action.types import DeployCompression, ExecOutput, PiGenStage, Release


class TestPiGenStage:
    """Tests for PiGenStage enum."""

    def test_six_stages(self) -> None:
        """There should be exactly stage0..stage5."""
        assert [s.directory_name for s in PiGenStage] == [
            "stage0",
            "stage1",
            "stage2",
            "stage3",
            "stage4",
            "stage5",
        ]

    def test_from_name_known(self) -> None:
        assert PiGenStage.from_name("stage3") is PiGenStage.STAGE3

    def test_from_name_unknown(self) -> None:
        """Unknown names and paths should not map to a stage."""
        assert PiGenStage.from_name("stage6") is None
        assert PiGenStage.from_name("Stage0") is None
        assert PiGenStage.from_name("/tmp/stage0") is None


class TestClosedSets:
    """Tests for Release and DeployCompression values."""

    def test_release_values(self) -> None:
        assert {r.value for r in Release} == {
            "bullseye",
            "jessie",
            "stretch",
            "buster",
            "testing",
        }

    def test_compression_values(self) -> None:
        assert {c.value for c in DeployCompression} == {"none", "zip", "gz", "xz"}


class TestExecOutput:
    """Tests for ExecOutput dataclass."""

    def test_success(self) -> None:
        assert ExecOutput(exit_code=0).success is True

    def test_failure(self) -> None:
        result = ExecOutput(exit_code=2, stderr="boom")
        assert result.success is False
        assert result.stdout == ""
