from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class ProjectPaths:
    inputs: Path
    outputs: Path

    @classmethod
    def under(cls, root: Path) -> ProjectPaths:
        return cls(inputs=root / "data" / "inputs", outputs=root / "data" / "outputs")


# repo_root/subcalc/config/paths.py -> repo_root
ROOT = Path(__file__).resolve().parents[2]
PATHS = ProjectPaths.under(ROOT)
