"""
Calcamabob entry point.

Run with: python -m calcamabob --expression "1 + 1"
"""

from calcamabob.cli import main

if __name__ == "__main__":
    main()
