#!/usr/bin/env python3
"""
S3 Meta - Main entry point.

Usage:
    python main.py scan s3://my-bucket
    python main.py scan s3://my-bucket/some/prefix --db meta.duckdb
    python main.py history --db meta.duckdb
"""

import sys

from s3meta.cli import main

if __name__ == '__main__':
    sys.exit(main())
