#!/usr/bin/env python3
"""tinmesh Command-Line Interface"""
import sys

from tinmesh.cli.app import main

if __name__ == "__main__":
    sys.exit(main())
