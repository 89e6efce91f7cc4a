from dataclasses import dataclass, field
from typing import Callable, List, Optional

@dataclass(slots=True)
class TokenKinds:
    """Token kind alphabet stored on a single registry entity.

    ``picker`` draws the kind of every newly created token; when absent the
    world's RNG chooses uniformly from ``kinds``.
    """
    kinds: List[str]
    picker: Optional[Callable[[], str]] = field(default=None, repr=False)

    def __contains__(self, kind: str) -> bool:
        return kind in self.kinds
