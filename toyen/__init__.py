"""
toyen: declarative build-description compiler.

Reads typed module declarations, resolves the dependency graph among them and
compiles every module into Ninja build actions, together with a rule that
regenerates the build file whenever a declaration file changes.
"""

__version__ = "0.1.0"
__author__ = "toyen authors"
