from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Phrase:
    """Hidden text for one round, plus the reference shown once revealed."""
    text: str
    reference: str = ""


SAMPLE_PHRASES: Sequence[Phrase] = (
    Phrase("In the beginning was the Word", "John 1:1"),
    Phrase("The Lord is my shepherd", "Psalm 23:1"),
    Phrase("Love is patient, love is kind", "1 Corinthians 13:4"),
    Phrase("Be still, and know that I am God", "Psalm 46:10"),
    Phrase("Let there be light", "Genesis 1:3"),
    Phrase("Rejoice in the Lord always", "Philippians 4:4"),
    Phrase("The truth will set you free", "John 8:32"),
    Phrase("Ask and it will be given to you", "Matthew 7:7"),
)


class PhraseBook:
    def __init__(self, phrases: Optional[Iterable[Phrase]] = None) -> None:
        self.phrases: List[Phrase] = list(SAMPLE_PHRASES if phrases is None else phrases)
        if not self.phrases:
            raise ValueError("PhraseBook needs at least one phrase")

    def __len__(self) -> int:
        return len(self.phrases)

    def __getitem__(self, index: int) -> Phrase:
        return self.phrases[index]

    def choose(self, rng: Optional[random.Random] = None) -> Phrase:
        rng = rng or random.Random()
        return self.phrases[rng.randrange(len(self.phrases))]

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "PhraseBook":
        """Load a JSON list of ``{"text": ..., "reference": ...}`` objects."""
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        phrases = [Phrase(str(item["text"]), str(item.get("reference", ""))) for item in data]
        logger.info("Loaded %d phrases from %s", len(phrases), path)
        return cls(phrases)
