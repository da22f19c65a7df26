"""
Per-terminal session identity.

Each terminal gets its own scratch context file, addressed by the pid of the
shell that runs ``frs`` together with that shell's start time.
"""

from frs.session.identity import ProcessInfo, SessionResolver, session_path

__all__ = ["ProcessInfo", "SessionResolver", "session_path"]
