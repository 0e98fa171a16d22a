# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "mrsyllabus"

OUTCOMES: Final[str] = f"{ROOT}:outcomes"  # append-only list of QueryOutcome JSON
