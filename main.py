#!/usr/bin/env python3
"""
Main script for running tinystat from a source checkout.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tinystat.cli import main

if __name__ == "__main__":
    sys.exit(main())
