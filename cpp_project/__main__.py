"""
Main entry point for the cpp_project package.

When run as `python -m cpp_project`, it behaves like the `cpp_project` command.
"""

from cpp_project.cli import main

if __name__ == "__main__":
    main()
