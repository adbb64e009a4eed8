"""
Test configuration for Law2Ledger tests.

sys.path is configured so 'from law2ledger...' resolves whether pytest is run
from the project root or from inside the package.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent.parent     # .../<project root>/

if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))
