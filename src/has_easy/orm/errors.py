from __future__ import annotations

from typing import Dict, Iterator, List, Tuple


class Errors:
    """Error messages grouped in named buckets, one bucket per attribute."""

    def __init__(self) -> None:
        self._messages: Dict[str, List[str]] = {}

    def add(self, name: str, message: str) -> None:
        self._messages.setdefault(name, []).append(message)

    def on(self, name: str) -> List[str]:
        return list(self._messages.get(name, []))

    def __getitem__(self, name: str) -> List[str]:
        return self.on(name)

    def __contains__(self, name: object) -> bool:
        return name in self._messages

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.items())

    def items(self) -> List[Tuple[str, str]]:
        return [(name, message) for name, messages in self._messages.items() for message in messages]

    def full_messages(self) -> List[str]:
        return [f"{name} {message}" for name, message in self.items()]

    def clear(self) -> None:
        self._messages.clear()

    def __repr__(self) -> str:
        return f"Errors({self._messages!r})"
