"""Smoke tests for the CLI.

These tests verify CLI behavior using temporary project trees
without requiring a Gradle installation.
"""

import json

from typer.testing import CliRunner

from apkbuild import __version__
from apkbuild.cli import app
from apkbuild.outputs.checksums import fingerprint

runner = CliRunner()


def _write_project(root, with_key=True):
    (root / "sager.properties").write_text(
        "PACKAGE_NAME=moe.matsuri.lite\nVERSION_NAME=0.4.5-beta\nVERSION_CODE=40\n"
    )
    if with_key:
        (root / "local.properties").write_text("KEYSTORE_PASS=s3cret\n")


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Android build logic" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert "Usage:" in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command(self) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Project root" in result.stdout
        assert "Signing:" in result.stdout
        assert "CI / Publishing:" in result.stdout

    def test_config_json(self) -> None:
        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        parsed = json.loads(result.stdout)
        assert parsed["project_name"] == "app"


class TestCLIResolve:
    """Test CLI resolve command."""

    def test_resolve_json(self) -> None:
        result = runner.invoke(app, ["resolve", "assembleOssArm64Release", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["flavor"] == "OssArm64Release"
        assert data["target_abi"] == "arm64-v8a"
        assert data["release"] is False

    def test_resolve_text(self) -> None:
        result = runner.invoke(app, ["resolve", "publishPlayReleaseBundle"])
        assert result.exit_code == 0
        assert "PlayRelease" in result.stdout
        assert "True" in result.stdout

    def test_resolve_without_tasks(self) -> None:
        result = runner.invoke(app, ["resolve", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["flavor"] == ""


class TestCLIPlan:
    """Test CLI plan command."""

    def test_plan_app_json(self, tmp_path) -> None:
        _write_project(tmp_path)
        result = runner.invoke(
            app,
            [
                "plan",
                "app",
                "assembleOssRelease",
                "--root",
                str(tmp_path),
                "--format",
                "json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["default_config"]["version_code"] == 200
        assert "play" not in data
        assert "s3cret" not in result.stdout

    def test_plan_writes_file(self, tmp_path) -> None:
        out = tmp_path / "lib.yaml"
        result = runner.invoke(
            app,
            ["plan", "cmake-library", "--root", str(tmp_path), "--output", str(out)],
        )
        assert result.exit_code == 0
        assert "cmake" in out.read_text()

    def test_plan_invalid_kind(self, tmp_path) -> None:
        result = runner.invoke(app, ["plan", "gadget", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Invalid module kind" in result.stdout

    def test_plan_release_without_key(self, tmp_path) -> None:
        """Release configuration without signing exits non-zero."""
        _write_project(tmp_path, with_key=False)
        result = runner.invoke(
            app, ["plan", "app", "assemblePlayRelease", "--root", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "Refusing" in result.stdout

    def test_plan_missing_metadata(self, tmp_path) -> None:
        result = runner.invoke(app, ["plan", "app", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "File not found" in result.stdout


class TestCLIChecksums:
    """Test checksum commands."""

    def test_checksum_file(self, tmp_path) -> None:
        output = tmp_path / "Matsuri-1.0.apk"
        output.write_bytes(b"data")

        result = runner.invoke(app, ["checksum", str(output)])

        assert result.exit_code == 0
        assert fingerprint(b"data") in result.stdout
        sum_file = tmp_path / "Matsuri-1.0.sha256sum.txt"
        assert sum_file.read_text() == fingerprint(b"data")

    def test_checksum_missing_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["checksum", str(tmp_path / "nope.apk")])
        assert result.exit_code == 1

    def test_checksums_for_flavor(self, tmp_path, monkeypatch) -> None:
        out_dir = tmp_path / "oss" / "release"
        out_dir.mkdir(parents=True)
        (out_dir / "Matsuri-1.0-arm64-v8a.apk").write_bytes(b"a")
        env_file = tmp_path / "github_env"
        env_file.touch()
        monkeypatch.setenv("GITHUB_ENV", str(env_file))

        result = runner.invoke(
            app,
            ["checksums", "assembleOssRelease", "--apk-root", str(tmp_path), "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [d["sha256"] for d in data] == [fingerprint(b"a")]
        assert f"SHA256_ARM64={fingerprint(b'a')}" in env_file.read_text()


class TestCLIRename:
    """Test rename command."""

    def test_rename_app(self) -> None:
        result = runner.invoke(
            app, ["rename", "app-oss-arm64-v8a-release.apk", "--version-name", "1.0"]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "Matsuri-1.0-arm64-v8a.apk"

    def test_rename_common(self) -> None:
        result = runner.invoke(
            app,
            [
                "rename",
                "app-release.apk",
                "--version-name",
                "2.0",
                "--common",
                "--project",
                "plugin",
            ],
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "plugin-2.0.apk"
