"""
Main entry point for the patch tool when run as a module.
"""

import sys

from patch_tool.cli import main

if __name__ == '__main__':
    sys.exit(main())
