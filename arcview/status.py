from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class StatusField:
    """
    A labelled value shown in the viewer's status bar.

    :ivar label: The label/name of the status field.
    :ivar fmt: Format string used when no formatter is given.
    :ivar formatter: Callable turning the value into display text.
    :ivar value: Current value.
    """
    label: str
    fmt: str = "{}"
    formatter: Callable[[Any], str] = None
    value: Any = 0.0

    def __post_init__(self):
        if self.formatter is None:
            self.formatter = lambda v, fmt=self.fmt: fmt.format(v)

    def text(self) -> str:
        return f"{self.label}: {self.formatter(self.value)}"


def format_vector(v) -> str:
    """Format a 3-vector with two decimals."""
    if not isinstance(v, (tuple, list)) or len(v) != 3:
        return "-"
    return "({:.2f}, {:.2f}, {:.2f})".format(*v)


# Each viewer deep-copies these so instances do not share values.
STATUS_FIELDS = {
    "eye": StatusField(label="Eye", formatter=format_vector, value=()),
    "direction": StatusField(label="Dir", formatter=format_vector, value=()),
    "distance": StatusField(label="Dist", fmt="{:.2f}"),
    "touches": StatusField(label="Touches", fmt="{}", value=0),
}
