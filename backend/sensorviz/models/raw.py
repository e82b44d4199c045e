"""
Raw CSV table (split and trimmed, not yet coerced).

The parser produces this structure; typed records are built from it in
sensorviz.services.canonicalizer.
"""

from dataclasses import dataclass, field


@dataclass
class RawTable:
    """Header and accepted data rows of a CSV sensor log, as strings."""

    header: list[str]
    rows: list[list[str]] = field(default_factory=list)

    # Rows dropped for a column-count mismatch or an empty key column
    skipped_rows: int = 0

    @property
    def column_index(self) -> dict[str, int]:
        """Map header name -> column position. Later duplicates win."""
        return {name: idx for idx, name in enumerate(self.header)}
