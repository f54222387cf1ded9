"""Core types for repository scanning."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Status:
    """Synchronization state of a single repository working copy.

    ``behind`` follows git's porcelain convention and is never positive,
    so a repository with no divergence has both counters at zero.
    """
    dirty: bool = False
    remote_error: bool = False
    ahead: int = 0
    behind: int = 0

    @property
    def is_clean(self) -> bool:
        """Check if the repository needs no attention."""
        return self == Status()

    def render(self) -> str:
        """Render the two-character status code.

        The first character is ``D`` for a dirty working tree. The second
        is, in priority order: ``E`` remote error, ``*`` diverged,
        ``+`` ahead, ``-`` behind, or a space.

        Returns:
            Two-character status code
        """
        code = "D" if self.dirty else " "

        if self.remote_error:
            code += "E"
        elif self.ahead > 0 and self.behind < 0:
            code += "*"
        elif self.ahead > 0:
            code += "+"
        elif self.behind < 0:
            code += "-"
        else:
            code += " "

        return code

    def format_line(self, path: str) -> str:
        """Format the report line for a repository."""
        return f"{self.render()} {path}"

    def __str__(self) -> str:
        return self.render()
