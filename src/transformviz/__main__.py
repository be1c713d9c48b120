"""
Run with: python -m transformviz
"""
import sys

from transformviz.main import main

if __name__ == "__main__":
    sys.exit(main())
