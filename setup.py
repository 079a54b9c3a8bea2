"""Build hook that records the git commit in netlib/_build_info.py.

Project metadata lives in pyproject.toml. This file only swaps in a build_py
command that writes _build_info.py into the build directory, so the source
tree is never modified. `netlib --version` reads it when present.
"""

import subprocess
import sys
from pathlib import Path

from setuptools import setup
from setuptools.command.build_py import build_py

_TEMPLATE = '''\
"""Build information - generated at build time, do not edit."""

COMMIT_HASH = "{commit}"
COMMIT_SHORT = "{short}"
MODIFIED = {modified}
'''


def _git(*args: str) -> str | None:
    """Run git in the project directory; None when git is unavailable."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=5,
            cwd=Path(__file__).parent,
        )
    except (subprocess.SubprocessError, OSError):
        return None
    return result.stdout.strip() if result.returncode == 0 else None


def _write_build_info(package_dir: Path) -> None:
    commit = _git("rev-parse", "HEAD")
    if not commit:
        print("netlib: no git checkout, skipping _build_info.py", file=sys.stderr)
        return
    status = _git("status", "--porcelain")
    content = _TEMPLATE.format(
        commit=commit, short=commit[:7], modified=bool(status)
    )
    (package_dir / "_build_info.py").write_text(content)
    print(f"netlib: wrote _build_info.py ({commit[:7]})", file=sys.stderr)


class BuildPyWithBuildInfo(build_py):
    """build_py that also writes _build_info.py into build_lib."""

    def run(self):
        super().run()
        if self.build_lib:
            package_dir = Path(self.build_lib) / "netlib"
            if package_dir.is_dir():
                _write_build_info(package_dir)


setup(cmdclass={"build_py": BuildPyWithBuildInfo})
