"""nukedir - Fast deletion of huge directory trees.

Empties a directory by mirroring an empty scratch directory onto it
with rsync, then removes the emptied directory itself.
"""

__version__ = "0.1.0"
