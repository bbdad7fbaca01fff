"""Text ingestion and segmentation."""

from author_attribution.ingest.loader import load_text
from author_attribution.ingest.segmenter import Sentence, flatten, segment
from author_attribution.ingest.splitter import chunk_indices
from author_attribution.ingest.tokenizer import tokenize

__all__ = ["Sentence", "chunk_indices", "flatten", "load_text", "segment", "tokenize"]
