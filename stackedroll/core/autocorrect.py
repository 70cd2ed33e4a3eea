from typing import Dict, Iterable, List, Optional, Tuple

import textdistance

from .names import normalize


class NameSuggester:
    """Suggests known player names for a name that did not resolve."""

    def __init__(self, names: Iterable[Tuple[str, str]] = (), limit: int = 5) -> None:
        self.limit = limit
        self.vocab: Dict[str, str] = {}
        for name, main in names:
            self.add_name(name, main)

    def add_name(self, name: str, main: Optional[str] = None) -> None:
        key = normalize(name)
        if not key or key in self.vocab:
            return
        self.vocab[key] = normalize(main) or key

    def suggest(self, name: str, min_similarity: float = 0.5) -> List[str]:
        key = normalize(name)
        if not key:
            return []
        scored = [
            (candidate, textdistance.levenshtein.normalized_similarity(candidate, key))
            for candidate in self.vocab
        ]
        scored = [item for item in scored if item[1] >= min_similarity]
        scored.sort(key=lambda item: (-item[1], item[0]))
        return [candidate for candidate, _ in scored][: self.limit]

    def main_for(self, name: str) -> Optional[str]:
        return self.vocab.get(normalize(name))
