"""Share: one evaluation (index, f(index)) of a sharing polynomial."""

from dataclasses import dataclass

from ecvss.errors import InvalidShareIndex
from ecvss.field import FieldElement


@dataclass(frozen=True)
class Share:
    """A participant's share.

    index identifies the participant and is never 0 (f(0) is the secret).
    Unpacks like the (x, y) tuple it stands for: ``x, y = share``.
    """

    index: int
    value: FieldElement

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise InvalidShareIndex(f"Share index must be an int, got {self.index!r}")
        if self.index < 1:
            raise InvalidShareIndex(f"Share index must be >= 1, got {self.index}")
        if not isinstance(self.value, FieldElement):
            raise TypeError(f"Share value must be a FieldElement, got {type(self.value).__name__}")

    def __iter__(self):
        yield self.index
        yield self.value

    def replace_value(self, value) -> 'Share':
        """Same index, new value reduced into the same field."""
        return Share(self.index, self.value.field(value))
