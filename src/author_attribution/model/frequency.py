"""
Frequency Model

The trained artifact: how often each author used each token. Built once
by the trainer through a FrequencyCounter and read-only afterwards.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from author_attribution.errors import UnknownAuthorError


@dataclass(frozen=True)
class FrequencyModel:
    """
    Per-token, per-author occurrence counts.

    Every vector is indexed by position in `authors`, and that position
    never changes once the model exists.
    """

    authors: tuple[str, ...]
    token_author_counts: Mapping[str, tuple[int, ...]] = field(hash=False)
    author_token_totals: tuple[int, ...]
    grand_total: int

    _author_indices: Mapping[str, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        authors = tuple(self.authors)
        counts = MappingProxyType(
            {token: tuple(vector) for token, vector in self.token_author_counts.items()}
        )
        totals = tuple(self.author_token_totals)

        object.__setattr__(self, "authors", authors)
        object.__setattr__(self, "token_author_counts", counts)
        object.__setattr__(self, "author_token_totals", totals)
        object.__setattr__(
            self,
            "_author_indices",
            MappingProxyType({author: i for i, author in enumerate(authors)}),
        )
        self._validate()

    def _validate(self) -> None:
        """Check that counts, totals and author list agree."""
        author_count = len(self.authors)
        if len(self._author_indices) != author_count:
            raise ValueError("Author names must be unique")
        if len(self.author_token_totals) != author_count:
            raise ValueError(
                f"Expected {author_count} author totals, got {len(self.author_token_totals)}"
            )

        sums = [0] * author_count
        for token, vector in self.token_author_counts.items():
            if len(vector) != author_count:
                raise ValueError(
                    f"Token {token!r} has {len(vector)} counts for {author_count} authors"
                )
            for i, count in enumerate(vector):
                if count < 0:
                    raise ValueError(f"Negative count for token {token!r}")
                sums[i] += count

        if list(self.author_token_totals) != sums:
            raise ValueError("Author totals do not match the token counts")
        if self.grand_total != sum(sums):
            raise ValueError("Grand total does not match the author totals")

    @classmethod
    def from_counts(
        cls,
        authors: Sequence[str],
        token_author_counts: Mapping[str, Sequence[int]],
    ) -> "FrequencyModel":
        """Build a model, deriving the author totals and the grand total."""
        totals = [0] * len(authors)
        for vector in token_author_counts.values():
            for i, count in enumerate(vector):
                totals[i] += count
        return cls(
            authors=tuple(authors),
            token_author_counts={t: tuple(v) for t, v in token_author_counts.items()},
            author_token_totals=tuple(totals),
            grand_total=sum(totals),
        )

    def author_index(self, author: str) -> int:
        """Position of an author in every per-author vector."""
        try:
            return self._author_indices[author]
        except KeyError:
            raise UnknownAuthorError(author) from None

    def author_total(self, author: str) -> int:
        return self.author_token_totals[self.author_index(author)]

    def token_count(self, token: str) -> int:
        """Occurrences of a token across all authors (0 if unseen)."""
        return sum(self.token_author_counts.get(token, ()))

    @property
    def vocabulary_size(self) -> int:
        return len(self.token_author_counts)

    def __contains__(self, token: object) -> bool:
        return token in self.token_author_counts

    def __len__(self) -> int:
        return len(self.token_author_counts)

    def __str__(self) -> str:
        return (
            f"Frequency model with {len(self.authors)} authors "
            f"and {self.grand_total} tokens."
        )


class FrequencyCounter:
    """
    Mutable token counter used while training.

    Counters built over separate shards of a dataset can be merged by
    vector addition before freezing.
    """

    def __init__(self, authors: Sequence[str]):
        self.authors = tuple(authors)
        self._counts: dict[str, list[int]] = {}

    def add(self, author_index: int, tokens: Iterable[str]) -> int:
        """Count tokens for one author; returns how many were added."""
        if not 0 <= author_index < len(self.authors):
            raise IndexError(f"Author index {author_index} out of range")

        added = 0
        width = len(self.authors)
        for token in tokens:
            vector = self._counts.get(token)
            if vector is None:
                vector = self._counts[token] = [0] * width
            vector[author_index] += 1
            added += 1
        return added

    def merge(self, other: "FrequencyCounter") -> None:
        """Add another counter's counts into this one."""
        if other.authors != self.authors:
            raise ValueError("Cannot merge counters with different author lists")

        width = len(self.authors)
        for token, other_vector in other._counts.items():
            vector = self._counts.get(token)
            if vector is None:
                vector = self._counts[token] = [0] * width
            for i, count in enumerate(other_vector):
                vector[i] += count

    def freeze(self) -> FrequencyModel:
        return FrequencyModel.from_counts(self.authors, self._counts)
