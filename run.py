"""App runner: import and run ClickHeatmap.core.app.main()."""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ClickHeatmap.core.app import main

if __name__ == "__main__":
    raise SystemExit(main())
