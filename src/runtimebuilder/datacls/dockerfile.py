from typing import List, Tuple


class Dockerfile:
    """
    Append-only buffer of Dockerfile lines.

    Lines can be added but never removed or reordered, so every step sees
    what the previous steps emitted.
    """

    def __init__(self):
        self._lines: List[str] = []

    def append_line(self, line: str = "") -> "Dockerfile":
        self._lines.append(line)
        return self

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def render(self) -> str:
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Dockerfile(lines={len(self._lines)})"
