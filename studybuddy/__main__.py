"""
Entry point for running StudyBuddy as a module.

Usage:
    python -m studybuddy
    python -m studybuddy tips
    python -m studybuddy --help
"""
from studybuddy.cli.main import main

if __name__ == "__main__":
    main()
