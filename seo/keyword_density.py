"""
Keyword density analysis for the word-cloud view.
"""
import logging
from collections import Counter
from typing import Any, Dict

from .text_utils import STOP_WORDS, alpha_tokens, word_count

logger = logging.getLogger(__name__)

HIGH_DENSITY = 2.0
MEDIUM_DENSITY = 1.0
DEFAULT_TOP_N = 30


def density_category(density: float) -> str:
    """Bucket a density percentage into high / medium / low."""
    if density >= HIGH_DENSITY:
        return 'high'
    if density >= MEDIUM_DENSITY:
        return 'medium'
    return 'low'


def analyze_keyword_density(text: str, top_n: int = DEFAULT_TOP_N) -> Dict[str, Any]:
    """
    Count non-stop-word terms and express each as a share of the document.

    Density is relative to the whitespace word count of the whole text, so a
    word used 3 times in a 100-word document has a density of 3.0.
    """
    total_words = word_count(text)
    counts = Counter(t for t in alpha_tokens(text) if t not in STOP_WORDS)

    keywords = []
    for word, count in counts.most_common(max(0, top_n)):
        density = round(count / total_words * 100, 2) if total_words else 0.0
        keywords.append({
            'word': word,
            'count': count,
            'density': density,
            'category': density_category(density),
        })

    logger.debug(f"Keyword density: {len(counts)} unique terms over {total_words} words")
    return {
        'keywords': keywords,
        'total_words': total_words,
        'unique_words': len(counts),
    }
