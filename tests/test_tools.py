"""
Unit tests for the external tool wrappers in buildops.tools
"""
import json
import subprocess
import tempfile
import threading
import unittest
from unittest.mock import patch

from buildops.tools import DockerRunner, DotnetRunner, GitHubReleaser, GitRunner, NodeRunner


def failing(returncode=1, stderr="boom"):
    return subprocess.CalledProcessError(returncode, "cmd", output="", stderr=stderr)


class TestToolRunner(unittest.TestCase):
    """Behaviour shared by every runner, exercised through GitRunner."""

    @patch('buildops.tools.base.run_command')
    def test_runs_in_runner_cwd(self, mock_run):
        mock_run.return_value = "done"
        success, message = GitRunner(cwd="/repo").add("a.txt")

        self.assertTrue(success)
        self.assertEqual(message, "done")
        mock_run.assert_called_once_with(["git", "add", "a.txt"], cwd="/repo", dry_run=False, capture_output=True)

    @patch('buildops.tools.base.run_command')
    def test_failure_becomes_tuple(self, mock_run):
        mock_run.side_effect = failing(stderr="fatal: not a git repository")
        success, message = GitRunner(cwd="/repo").commit("msg")

        self.assertFalse(success)
        self.assertIn("not a git repository", message)
        self.assertTrue(message.startswith("git commit -m msg failed"))

    @patch('buildops.tools.base.run_command')
    def test_dry_run_message(self, mock_run):
        mock_run.return_value = "Dry run output"
        success, message = GitRunner(dry_run=True).tag("v1.0.0")

        self.assertTrue(success)
        self.assertEqual(message, "Dry run: would run git tag v1.0.0")
        self.assertTrue(mock_run.call_args.kwargs["dry_run"])

    @patch('buildops.tools.base.run_command')
    def test_queries_return_none_on_failure(self, mock_run):
        mock_run.side_effect = failing(128)
        self.assertIsNone(GitRunner().current_branch())

    @patch('buildops.tools.base.run_command')
    def test_is_clean(self, mock_run):
        mock_run.return_value = ""
        self.assertTrue(GitRunner().is_clean())
        mock_run.return_value = " M setup.py"
        self.assertFalse(GitRunner().is_clean())

    def test_executable_comes_from_config(self):
        with patch('buildops.tools.base.load_config', return_value={"tools": {"git": "/opt/git/bin/git"}}):
            self.assertEqual(GitRunner().command("status"), ["/opt/git/bin/git", "status"])

    def test_explicit_executable(self):
        self.assertEqual(DockerRunner(executable="podman").command("ps"), ["podman", "ps"])


class TestGitRunner(unittest.TestCase):

    @patch('buildops.tools.base.run_command')
    def test_annotated_tag(self, mock_run):
        GitRunner().tag("v2.0.0", message="Release 2.0.0")
        self.assertEqual(mock_run.call_args.args[0], ["git", "tag", "-a", "v2.0.0", "-m", "Release 2.0.0"])

    @patch('buildops.tools.base.run_command')
    def test_push_tags(self, mock_run):
        GitRunner().push("origin", tags=True)
        self.assertEqual(mock_run.call_args.args[0], ["git", "push", "origin", "--tags"])

    @patch('buildops.tools.base.run_command')
    def test_shallow_clone(self, mock_run):
        GitRunner().clone("https://example.com/r.git", "dest", depth=1)
        self.assertEqual(mock_run.call_args.args[0],
                         ["git", "clone", "--depth", "1", "https://example.com/r.git", "dest"])


class TestDockerRunner(unittest.TestCase):

    @patch('buildops.tools.base.run_command')
    def test_build_arguments(self, mock_run):
        DockerRunner(cwd="/src").build("app:1.0", dockerfile="docker/Dockerfile",
                                       build_args={"VERSION": "1.0"}, platform="linux/amd64", no_cache=True)
        self.assertEqual(mock_run.call_args.args[0], [
            "docker", "build", "-t", "app:1.0", "-f", "docker/Dockerfile",
            "--build-arg", "VERSION=1.0", "--platform", "linux/amd64", "--no-cache", ".",
        ])
        self.assertEqual(mock_run.call_args.kwargs["cwd"], "/src")


class TestDotnetRunner(unittest.TestCase):

    @patch('buildops.tools.base.run_command')
    def test_build_without_project(self, mock_run):
        DotnetRunner().build()
        self.assertEqual(mock_run.call_args.args[0], ["dotnet", "build", "-c", "Release"])

    @patch('buildops.tools.base.run_command')
    def test_pack_with_version(self, mock_run):
        DotnetRunner().pack("Lib.csproj", "Debug", output="nupkgs", version="1.2.3")
        self.assertEqual(mock_run.call_args.args[0],
                         ["dotnet", "pack", "Lib.csproj", "-c", "Debug", "-o", "nupkgs", "-p:Version=1.2.3"])


class TestNodeRunner(unittest.TestCase):

    def test_unsupported_client(self):
        with self.assertRaises(ValueError):
            NodeRunner(client="bun")

    @patch('buildops.tools.base.run_command')
    def test_frozen_install_uses_ci_with_lockfile(self, mock_run):
        with patch.object(NodeRunner, 'has_lockfile', return_value=True):
            NodeRunner(client="npm").install(frozen=True)
        self.assertEqual(mock_run.call_args.args[0], ["npm", "ci"])

    @patch('buildops.tools.base.run_command')
    def test_frozen_install_yarn(self, mock_run):
        NodeRunner(client="yarn").install(frozen=True)
        self.assertEqual(mock_run.call_args.args[0], ["yarn", "install", "--frozen-lockfile"])

    @patch('buildops.tools.base.run_command')
    def test_publish_requires_package_json(self, mock_run):
        success, message = NodeRunner(cwd="/nonexistent", client="npm").publish()
        self.assertFalse(success)
        self.assertEqual(message, "No package.json found")
        mock_run.assert_not_called()


class TestGitHubReleaser(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.assets = []
        for name in ("app.zip", "app.tar.gz", "checksums.txt"):
            path = f"{self.temp_dir.name}/{name}"
            with open(path, "w") as f:
                f.write(name)
            self.assets.append(path)

    @patch('buildops.tools.base.run_command')
    def test_repo_flag_is_appended(self, mock_run):
        GitHubReleaser(repo="owner/project", max_workers=1).create_release("v1.0.0", notes="Notes")
        self.assertEqual(mock_run.call_args.args[0], [
            "gh", "release", "create", "v1.0.0", "--title", "v1.0.0", "--notes", "Notes",
            "--repo", "owner/project",
        ])

    @patch('buildops.tools.base.run_command')
    def test_generated_notes_when_none_given(self, mock_run):
        GitHubReleaser(max_workers=1).create_release("v1.0.0", draft=True)
        self.assertIn("--generate-notes", mock_run.call_args.args[0])
        self.assertIn("--draft", mock_run.call_args.args[0])

    @patch('buildops.tools.base.run_command')
    def test_upload_all_succeed(self, mock_run):
        mock_run.return_value = ""
        result = GitHubReleaser(max_workers=3).upload_assets("v1.0.0", self.assets)

        self.assertTrue(result["success"])
        self.assertEqual(sorted(result["uploaded"]), sorted(self.assets))
        self.assertEqual(result["failed"], [])
        self.assertEqual(mock_run.call_count, 3)

    @patch('buildops.tools.base.run_command')
    def test_upload_joins_all_tasks_and_reports_failures(self, mock_run):
        lock = threading.Lock()
        calls = []

        def fake_run(args, **kwargs):
            with lock:
                calls.append(args[4])
            if args[4].endswith("app.tar.gz"):
                raise failing(stderr="HTTP 422: already_exists")
            return ""

        mock_run.side_effect = fake_run
        result = GitHubReleaser(max_workers=3).upload_assets("v1.0.0", self.assets)

        self.assertFalse(result["success"])
        self.assertEqual(len(calls), 3)
        self.assertEqual(len(result["uploaded"]), 2)
        self.assertEqual(result["failed"][0]["asset"], self.assets[1])
        self.assertIn("already_exists", result["failed"][0]["error"])
        json.dumps(result)

    @patch('buildops.tools.base.run_command')
    def test_missing_asset_is_a_failed_task(self, mock_run):
        result = GitHubReleaser(max_workers=2).upload_assets("v1.0.0", [self.assets[0], "/nope/missing.zip"])

        self.assertFalse(result["success"])
        self.assertEqual(result["uploaded"], [self.assets[0]])
        self.assertIn("Asset not found", result["failed"][0]["error"])

    def test_no_assets(self):
        result = GitHubReleaser(max_workers=2).upload_assets("v1.0.0", [])
        self.assertEqual(result, {"tag": "v1.0.0", "success": True, "uploaded": [], "failed": []})

    def test_max_workers_from_config(self):
        with patch('buildops.tools.github.load_config', return_value={"release": {"max_parallel_uploads": 8}}):
            self.assertEqual(GitHubReleaser(executable="gh").max_workers, 8)

    @patch('buildops.tools.base.run_command')
    def test_publish_skips_create_for_existing_release(self, mock_run):
        mock_run.return_value = '{"tagName": "v1.0.0"}'
        result = GitHubReleaser(max_workers=1).publish("v1.0.0", self.assets[:1])

        self.assertTrue(result["success"])
        self.assertEqual(result["release"], "exists")
        subcommands = [call.args[0][2] for call in mock_run.call_args_list]
        self.assertNotIn("create", subcommands)

    @patch('buildops.tools.base.run_command')
    def test_publish_stops_when_create_fails(self, mock_run):
        mock_run.side_effect = failing(stderr="release not found")
        result = GitHubReleaser(max_workers=1).publish("v1.0.0", self.assets)

        self.assertFalse(result["success"])
        self.assertIn("release not found", result["error"])
        self.assertEqual(result["uploaded"], [])


if __name__ == '__main__':
    unittest.main()
