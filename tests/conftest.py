import sys
from pathlib import Path

# (1) Put the repository root on sys.path so tests can import scripts.*
#     next to the installed rostercheck package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
