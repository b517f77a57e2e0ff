"""
GitHub release publishing through the gh CLI.

Asset uploads run in parallel: every asset is an independent task, all tasks
are joined before the combined result is reported, and there is no ordering
between them. A hung upload holds up the whole batch; there is no per-task
timeout or cancellation.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import load_config, logger
from .base import ToolRunner


class GitHubReleaser(ToolRunner):
    tool = "gh"

    def __init__(self, cwd=".", dry_run: bool = False, executable: Optional[str] = None,
                 repo: Optional[str] = None, max_workers: Optional[int] = None):
        super().__init__(cwd=cwd, dry_run=dry_run, executable=executable)
        self.repo = repo
        if max_workers is None:
            max_workers = load_config().get("release", {}).get("max_parallel_uploads", 4)
        self.max_workers = max(1, int(max_workers))

    def command(self, *args) -> List[str]:
        cmd = super().command(*args)
        if self.repo:
            cmd += ["--repo", self.repo]
        return cmd

    def release_exists(self, tag: str) -> bool:
        return self._query(self.command("release", "view", tag, "--json", "tagName")) is not None

    def create_release(self, tag: str, title: Optional[str] = None, notes: Optional[str] = None,
                       draft: bool = False, prerelease: bool = False,
                       target: Optional[str] = None) -> Tuple[bool, str]:
        args = ["release", "create", tag, "--title", title or tag]
        if notes:
            args += ["--notes", notes]
        else:
            args.append("--generate-notes")
        if draft:
            args.append("--draft")
        if prerelease:
            args.append("--prerelease")
        if target:
            args += ["--target", target]
        return self._run(self.command(*args))

    def delete_release(self, tag: str, cleanup_tag: bool = False) -> Tuple[bool, str]:
        args = ["release", "delete", tag, "--yes"]
        if cleanup_tag:
            args.append("--cleanup-tag")
        return self._run(self.command(*args))

    def upload_asset(self, tag: str, asset, clobber: bool = False) -> Tuple[bool, str]:
        asset = Path(asset)
        if not asset.is_file():
            return False, f"Asset not found: {asset}"
        args = ["release", "upload", tag, str(asset)]
        if clobber:
            args.append("--clobber")
        return self._run(self.command(*args))

    def upload_assets(self, tag: str, assets: Iterable, clobber: bool = False) -> Dict:
        """
        Uploads assets concurrently and waits for all of them.

        Returns:
            dict: ``success`` is True only when every upload succeeded;
            ``uploaded`` and ``failed`` list the individual outcomes.
        """
        assets = [str(a) for a in assets]
        uploaded, failed = [], []
        if not assets:
            return {"tag": tag, "success": True, "uploaded": uploaded, "failed": failed}

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(assets))) as executor:
            futures = {
                executor.submit(self.upload_asset, tag, asset, clobber): asset
                for asset in assets
            }
            for future in as_completed(futures):
                asset = futures[future]
                try:
                    success, message = future.result()
                except Exception as e:
                    success, message = False, str(e)
                if success:
                    logger.info(f"Uploaded {asset} to release {tag}")
                    uploaded.append(asset)
                else:
                    logger.error(f"Upload of {asset} failed: {message}")
                    failed.append({"asset": asset, "error": message})

        return {"tag": tag, "success": not failed, "uploaded": uploaded, "failed": failed}

    def publish(self, tag: str, assets: Iterable = (), title: Optional[str] = None,
                notes: Optional[str] = None, draft: bool = False, prerelease: bool = False,
                clobber: bool = False) -> Dict:
        """Creates the release when it does not exist yet, then uploads assets."""
        if not self.dry_run and self.release_exists(tag):
            logger.info(f"Release {tag} already exists, uploading assets only")
            created, message = True, "exists"
        else:
            created, message = self.create_release(tag, title=title, notes=notes,
                                                   draft=draft, prerelease=prerelease)
        if not created:
            return {"tag": tag, "success": False, "error": message, "uploaded": [], "failed": []}
        result = self.upload_assets(tag, assets, clobber=clobber)
        result["release"] = message
        return result
