from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from pkgcatalog.domain.models import BuildResult

logger = logging.getLogger(__name__)

BUILD_ARGS = ["--gc", "--minify"]


class SiteBuilder:
    """
    Runs the Hugo build as a sanity check after package files change.

    The result is informational only; a failed build never fails the
    command that triggered it.
    """

    def __init__(self, site_dir: Optional[Path] = None, hugo_bin: str = "hugo"):
        self.site_dir = Path(site_dir) if site_dir is not None else None
        self.hugo_bin = hugo_bin

    def command(self) -> List[str]:
        return [self.hugo_bin, *BUILD_ARGS]

    def validate(self) -> BuildResult:
        cmd = self.command()
        logger.debug(f"Running {' '.join(cmd)} in {self.site_dir or Path.cwd()}")
        try:
            proc = subprocess.run(
                cmd,
                cwd=self.site_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.warning(f"Could not run site build: {e}")
            return BuildResult(ok=False, output=str(e))

        if proc.returncode != 0:
            logger.warning(f"Site build exited with status {proc.returncode}")
        return BuildResult(ok=proc.returncode == 0, returncode=proc.returncode, output=proc.stdout or "")
