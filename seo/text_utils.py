"""
Text helpers shared by the scoring, density and SERP modules.
Pure Python, no external dependencies.
"""
import re

STOP_WORDS = frozenset({
    'the', 'and', 'for', 'are', 'but', 'not', 'you', 'all', 'any', 'can',
    'had', 'her', 'was', 'one', 'our', 'out', 'day', 'get', 'has', 'him',
    'his', 'how', 'its', 'may', 'new', 'now', 'old', 'see', 'two', 'way',
    'who', 'did', 'let', 'put', 'say', 'she', 'too', 'use', 'also', 'been',
    'from', 'have', 'into', 'just', 'like', 'make', 'many', 'more', 'most',
    'much', 'must', 'only', 'over', 'such', 'take', 'than', 'that', 'them',
    'then', 'they', 'this', 'very', 'well', 'were', 'what', 'when', 'with',
    'your', 'will', 'each', 'which', 'their', 'there', 'these', 'those',
    'about', 'after', 'again', 'being', 'could', 'should', 'would', 'where',
    'while', 'other', 'some', 'here', 'does', 'doing', 'because', 'before',
    'between', 'both', 'during', 'further', 'through', 'under', 'until',
    'above', 'below', 'same', 'own', 'off', 'once', 'why', 'yours', 'ours',
    'itself', 'himself', 'herself', 'themselves', 'ourselves', 'yourself',
})

ALPHA_WORD_RE = re.compile(r'[a-z]+')


def normalize(text):
    """Lowercase and strip, treating None as empty."""
    return (text or '').lower().strip()


def word_count(text):
    """Whitespace-delimited word count (0 for empty text)."""
    if not text:
        return 0
    return len(text.split())


def paragraph_count(text):
    """Number of non-empty blocks separated by blank lines."""
    if not text or not text.strip():
        return 0
    return len([p for p in re.split(r'\n\s*\n', text.strip()) if p.strip()])


def count_occurrences(text, phrase):
    """Case-insensitive, non-overlapping occurrences of phrase in text."""
    phrase = normalize(phrase)
    if not text or not phrase:
        return 0
    return len(re.findall(re.escape(phrase), text.lower()))


def contains_phrase(text, phrase):
    """Case-insensitive substring check; a blank phrase never matches."""
    phrase = normalize(phrase)
    if not phrase:
        return False
    return phrase in (text or '').lower()


def alpha_tokens(text, min_length=3):
    """Lowercase alphabetic tokens of at least min_length characters."""
    if not text:
        return []
    return [t for t in ALPHA_WORD_RE.findall(text.lower()) if len(t) >= min_length]


def entity_name(entity):
    """Entities arrive as {'name': ..., 'count': ...} dicts or bare strings."""
    if isinstance(entity, dict):
        return str(entity.get('name') or '').strip()
    return str(entity or '').strip()
