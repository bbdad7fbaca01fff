"""
Author Classification

Scores text against a trained FrequencyModel, sentence by sentence.

Each token gets a spam-filter style rating per author, the ratings of a
sentence are trimmed of outliers and combined into one score in [0, 1]
per author, and the document score is the mean over its sentences.
"""

from dataclasses import dataclass, field
import math
from typing import Optional, Sequence

from author_attribution.config import Settings, get_settings
from author_attribution.errors import DegenerateInput, DegenerateKind
from author_attribution.ingest.segmenter import segment
from author_attribution.logging_utils import get_logger
from author_attribution.model.frequency import FrequencyModel

logger = get_logger(__name__)


@dataclass
class Predication:
    """Unlabelled scores, indexed by author position in the model."""
    sentences: list[tuple[int, list[float]]]  # (source offset, score per author)
    total: list[float]
    issues: list[DegenerateInput] = field(default_factory=list)


@dataclass(frozen=True)
class SentenceScores:
    """Author scores for one sentence."""
    offset: int
    scores: dict[str, float]


@dataclass(frozen=True)
class Classification:
    """Author-labelled result of classifying a text."""
    sentences: tuple[SentenceScores, ...]
    aggregate: dict[str, float]
    issues: tuple[DegenerateInput, ...] = ()

    def best_author(self) -> Optional[str]:
        """Author with the highest aggregate score (None without authors)."""
        if not self.aggregate:
            return None
        return max(self.aggregate, key=self.aggregate.__getitem__)

    def to_dict(self) -> dict:
        return {
            "sentences": [
                {"offset": s.offset, "scores": dict(s.scores)} for s in self.sentences
            ],
            "aggregate": dict(self.aggregate),
            "issues": [
                {
                    "kind": issue.kind.value,
                    "sentence_index": issue.sentence_index,
                    "author": issue.author,
                }
                for issue in self.issues
            ],
        }


def computed_rating(
    model: FrequencyModel,
    token_counts: Sequence[int],
    author_index: int,
    settings: Settings,
) -> float:
    """
    How strongly a known token points at one author, clamped to the rating bounds.

    Compares the token's relative frequency in the author's texts with its
    relative frequency in everybody else's.
    """
    author_total = model.author_token_totals[author_index]
    if author_total == 0:
        # Unguarded, 0/0 clamps to the lower bound
        return settings.min_rating

    author_count = token_counts[author_index]
    this = author_count / author_total

    other_total = model.grand_total - author_total
    other = (sum(token_counts) - author_count) / other_total if other_total else 0.0

    if this + other == 0:
        return settings.min_rating

    rating = this / (this + other)
    return min(max(rating, settings.min_rating), settings.max_rating)


def rate_token(
    model: FrequencyModel,
    token: str,
    author_index: int,
    settings: Optional[Settings] = None,
) -> list[float]:
    """
    Ratings one token contributes for one author.

    Unseen tokens get the fixed unseen rating. A known token the author
    never used gets the fixed no-token rating, followed by the computed
    rating unless zero_count_policy is "fixed".
    """
    settings = settings or get_settings()

    token_counts = model.token_author_counts.get(token)
    if token_counts is None:
        return [settings.unseen_token_rating]

    ratings = []
    if token_counts[author_index] == 0:
        ratings.append(settings.no_token_rating)
        if settings.zero_count_policy == "fixed":
            return ratings

    ratings.append(computed_rating(model, token_counts, author_index, settings))
    return ratings


def trim_ratings(ratings: Sequence[float], settings: Optional[Settings] = None) -> list[float]:
    """
    Drop outlier ratings before combination.

    With more than trim_threshold ratings, the trim_count lowest and highest
    are removed; if more than max_ratings remain, only the tail_ratings most
    extreme at each end are kept.
    """
    settings = settings or get_settings()

    if len(ratings) <= settings.trim_threshold:
        return list(ratings)

    ordered = sorted(ratings)
    k = settings.trim_count
    ordered = ordered[k:len(ordered) - k]

    if len(ordered) > settings.max_ratings:
        tail = settings.tail_ratings
        ordered = ordered[:tail] + ordered[-tail:]

    return ordered


def combine_ratings(ratings: Sequence[float]) -> Optional[float]:
    """
    Combine ratings into one score in [0, 1].

    Uses the geometric means of the ratings and of their complements; 0.5
    means no evidence either way. Returns None for an empty list.
    """
    n = len(ratings)
    if n == 0:
        return None

    nth = 1.0 / n
    p = 1.0 - math.prod(1.0 - r for r in ratings) ** nth
    q = 1.0 - math.prod(ratings) ** nth
    if p + q == 0:
        return None

    s = (p - q) / (p + q)
    return (1.0 + s) / 2.0


class Classifier:
    """
    Scores texts against a trained model. Never modifies the model.

    Usage:
        classifier = Classifier(model)
        result = classifier.classify(text)
        result.best_author()
    """

    def __init__(
        self,
        model: FrequencyModel,
        settings: Optional[Settings] = None,
        strict: bool = False,
    ):
        """
        Args:
            model: Trained frequency model
            settings: Rating and segmentation settings (defaults to get_settings())
            strict: Raise DegenerateInput instead of substituting a neutral score
        """
        self.model = model
        self.settings = settings or get_settings()
        self.strict = strict

    def classify(self, text: str) -> Classification:
        """Score a text and label the scores with author names."""
        predication = self.predicate(text)
        return Classification(
            sentences=tuple(
                SentenceScores(offset=offset, scores=self._label(scores))
                for offset, scores in predication.sentences
            ),
            aggregate=self._label(predication.total),
            issues=tuple(predication.issues),
        )

    def predicate(self, text: str) -> Predication:
        """Score a text per sentence and in total, by author position."""
        sentences = segment(text, self.settings)
        predication = Predication(sentences=[], total=[])

        for index, sentence in enumerate(sentences):
            scores = self._score_sentence(index, sentence.tokens, predication)
            predication.sentences.append((sentence.offset, scores))

        author_count = len(self.model.authors)
        if not predication.sentences:
            self._report(predication, DegenerateInput(DegenerateKind.EMPTY_DOCUMENT))
            predication.total = [self.settings.neutral_score] * author_count
            return predication

        sentence_count = len(predication.sentences)
        predication.total = [
            sum(scores[a] for _, scores in predication.sentences) / sentence_count
            for a in range(author_count)
        ]
        return predication

    def _score_sentence(
        self,
        index: int,
        tokens: Sequence[str],
        predication: Predication,
    ) -> list[float]:
        model = self.model
        author_count = len(model.authors)

        if not tokens:
            self._report(
                predication, DegenerateInput(DegenerateKind.EMPTY_SENTENCE, sentence_index=index)
            )
            return [self.settings.neutral_score] * author_count

        ratings: list[list[float]] = [[] for _ in range(author_count)]
        for token in tokens:
            for author_index in range(author_count):
                ratings[author_index].extend(
                    rate_token(model, token, author_index, self.settings)
                )

        known = any(token in model for token in tokens)
        scores = []
        for author_index, author_ratings in enumerate(ratings):
            if known and model.author_token_totals[author_index] == 0:
                self._report_zero_total(predication, index, author_index)

            score = combine_ratings(trim_ratings(author_ratings, self.settings))
            if score is None:
                self._report(
                    predication,
                    DegenerateInput(
                        DegenerateKind.EMPTY_SENTENCE,
                        sentence_index=index,
                        author=model.authors[author_index],
                    ),
                )
                score = self.settings.neutral_score
            scores.append(score)

        return scores

    def _report_zero_total(self, predication: Predication, index: int, author_index: int) -> None:
        """Record a zero-total author once per text."""
        author = self.model.authors[author_index]
        already = any(
            issue.kind is DegenerateKind.ZERO_AUTHOR_TOTAL and issue.author == author
            for issue in predication.issues
        )
        if not already:
            self._report(
                predication,
                DegenerateInput(DegenerateKind.ZERO_AUTHOR_TOTAL, sentence_index=index, author=author),
            )

    def _report(self, predication: Predication, issue: DegenerateInput) -> None:
        if self.strict:
            raise issue
        logger.warning("%s", issue)
        predication.issues.append(issue)

    def _label(self, vector: Sequence[float]) -> dict[str, float]:
        return dict(zip(self.model.authors, vector))


def classify(
    model: FrequencyModel,
    text: str,
    settings: Optional[Settings] = None,
) -> Classification:
    """Classify text with a non-strict Classifier."""
    return Classifier(model, settings).classify(text)
