"""
Recent prompt history.

Keeps the most recent distinct prompts, newest first, capped in size.
In-memory; owned by the studio session.

Dependencies: none
System role: Prompt recall for the composer
"""

MAX_HISTORY_ITEMS = 20


class PromptHistory:
    """De-duplicated, size-capped list of recent prompts."""

    def __init__(self, max_items: int = MAX_HISTORY_ITEMS) -> None:
        self.max_items = max_items
        self._items: list[str] = []

    @property
    def items(self) -> list[str]:
        return list(self._items)

    def add(self, prompt: str | None) -> list[str]:
        """Move prompt to the front, dropping earlier duplicates. Blank prompts are ignored."""
        text = (prompt or "").strip()
        if not text:
            return self.items
        remaining = [item for item in self._items if item.strip() != text]
        self._items = [text, *remaining][: self.max_items]
        return self.items

    def clear(self) -> None:
        self._items.clear()
