"""Make package runnable with python -m ai_kernel.

This module provides the entry point for running the package as a module
(python -m ai_kernel) and for the installed console script (ai-kernel).
"""

import sys

from ai_kernel.cli import main

if __name__ == "__main__":
    sys.exit(main())
