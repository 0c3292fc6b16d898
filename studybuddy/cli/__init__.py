"""
Terminal interface for StudyBuddy.

- navigation: screen state machine
- controller: application root and commands
- screens: Rich renderings
- hub: interactive prompt loop
- main: Typer entry point
"""
