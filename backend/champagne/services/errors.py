"""Layout errors raised by the panel services (API maps them to 422)."""

from __future__ import annotations

# Not an exception: a zero-column or zero-row grid still yields a valid (empty) layout.
DEGENERATE_GRID = "degenerate_grid"


class LayoutError(ValueError):
    """Base for failures that prevent a layout from being produced."""

    kind = "layout_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class InvalidSpec(LayoutError):
    """A panel parameter is outside its domain."""

    kind = "invalid_spec"


class InvalidSchedule(LayoutError):
    """The step schedule leaves no usable hole radius."""

    kind = "invalid_schedule"
