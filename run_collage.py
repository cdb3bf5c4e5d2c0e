"""
Run the collage CLI from a source checkout.

Puts ``src/`` on the import path and hands the command line to
:func:`grid_collage.cli.main`, so an uninstalled clone behaves like the
``grid-collage`` console script:

    python run_collage.py --grid-size 2 --cell 0,0=a.jpg --cell 1,1=b.jpg
"""
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

import grid_collage.cli as gc_cli  # noqa: E402

if __name__ == "__main__":
    gc_cli.main()
