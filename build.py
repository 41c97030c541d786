#!/usr/bin/env python3
"""Build the site in the current directory.

  python build.py                   full rebuild
  python build.py --changed [PATH]  rebuild changed posts (paths or $CHANGED_FILES)
"""
from __future__ import annotations

from blogsdk.cli import main

if __name__ == "__main__":
    main()
