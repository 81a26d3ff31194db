"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

ELLIPSIS = "..."


@dataclass(frozen=True)
class SummaryConfig:
    """Output bounds for the summary written to the gist."""

    max_lines: int = 5
    max_length: int = 95

    def __post_init__(self) -> None:
        if self.max_lines < 0:
            raise ValueError(f"max_lines must be >= 0, got {self.max_lines}")
        if self.max_length <= len(ELLIPSIS):
            raise ValueError(f"max_length must be > {len(ELLIPSIS)}, got {self.max_length}")
