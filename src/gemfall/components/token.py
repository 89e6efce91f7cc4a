from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class TokenKind:
    """Kind of a single token entity.

    Frozen: a token keeps its kind for its whole lifetime. Position lives in a
    separate BoardPosition component.
    """
    kind: str
