from pathlib import Path
import re

from setuptools import find_packages, setup


def _read_version() -> str:
    init = Path(__file__).parent / "src" / "smarttemplate" / "__init__.py"
    match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]", init.read_text(encoding="utf-8"), re.M)
    if not match:
        raise RuntimeError("Unable to find __version__ in src/smarttemplate/__init__.py")
    return match.group(1)


setup(
    name="smarttemplate",
    version=_read_version(),
    description="Callback-driven text template renderer with named placeholders",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
)
