"""
Heuristic SEO scoring for a piece of content.

Five independent, point-additive checks are summed and capped at 100:

  title      (30)  keyword present, 30-60 chars, keyword near the start
  meta       (25)  keyword present, 120-160 chars, compelling wording
  content    (40)  800+ words, 0.5-3.0% keyword density, entity coverage
  structure  (30)  H1/H2/H3 markers, lists, bold text, 5+ paragraphs
  keyword    (20)  3-8 exact uses, keyword in a heading, keyword early

Nothing here touches the database; callers pass plain strings and get a dict back.
"""
import logging
import re
from typing import Any, Dict, Iterable, List

from .text_utils import (
    contains_phrase,
    count_occurrences,
    entity_name,
    normalize,
    paragraph_count,
    word_count,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100

TITLE_LENGTH_RANGE = (30, 60)
META_LENGTH_RANGE = (120, 160)
MIN_WORD_COUNT = 800
KEYWORD_DENSITY_RANGE = (0.5, 3.0)
EXACT_MATCH_RANGE = (3, 8)
KEYWORD_POSITION_LIMIT = 10
OPENING_CHARS = 200
ENTITY_POINTS = 2
ENTITY_BONUS_CAP = 15
MIN_PARAGRAPHS = 5

COMPELLING_WORDS = (
    'discover', 'learn', 'master', 'expert', 'proven', 'complete',
    'ultimate', 'essential', 'comprehensive', 'exclusive',
)

H1_RE = re.compile(r'^#\s')
H2_RE = re.compile(r'^##\s', re.MULTILINE)
H3_RE = re.compile(r'^###\s', re.MULTILINE)
LIST_RE = re.compile(r'^[-*]\s', re.MULTILINE)
BOLD_RE = re.compile(r'\*\*.*?\*\*')


def _in_range(value, bounds):
    low, high = bounds
    return low <= value <= high


def keyword_density(content: str, keyword: str) -> float:
    """Keyword occurrences per 100 words, rounded to 2 decimals."""
    total = word_count(content)
    if total == 0:
        return 0.0
    return round(count_occurrences(content, keyword) / total * 100, 2)


def has_compelling_words(text: str) -> bool:
    text = normalize(text)
    return any(word in text for word in COMPELLING_WORDS)


def analyze_title(title: str, keyword: str) -> Dict[str, Any]:
    title = title or ''
    has_keyword = contains_phrase(title, keyword)
    position = title.lower().find(normalize(keyword)) if has_keyword else -1
    analysis = {
        'has_keyword': has_keyword,
        'length': len(title),
        'is_optimal_length': _in_range(len(title), TITLE_LENGTH_RANGE),
        'keyword_position': position,
    }

    score = 0
    if analysis['has_keyword']:
        score += 15
    if analysis['is_optimal_length']:
        score += 10
    if has_keyword and position <= KEYWORD_POSITION_LIMIT:
        score += 5
    analysis['score'] = score
    return analysis


def analyze_meta_description(meta_description: str, keyword: str) -> Dict[str, Any]:
    meta_description = meta_description or ''
    analysis = {
        'has_keyword': contains_phrase(meta_description, keyword),
        'length': len(meta_description),
        'is_optimal_length': _in_range(len(meta_description), META_LENGTH_RANGE),
        'is_compelling': has_compelling_words(meta_description),
    }

    score = 0
    if analysis['has_keyword']:
        score += 10
    if analysis['is_optimal_length']:
        score += 8
    if analysis['is_compelling']:
        score += 7
    analysis['score'] = score
    return analysis


def analyze_content(content: str, keyword: str, entities: Iterable) -> Dict[str, Any]:
    content = content or ''
    names = []
    for entity in entities or []:
        name = entity_name(entity)
        if name and name.lower() not in (n.lower() for n in names):
            names.append(name)

    words = word_count(content)
    density = keyword_density(content, keyword)
    entities_used = [name for name in names if contains_phrase(content, name)]

    analysis = {
        'word_count': words,
        'keyword_density': density,
        'entity_usage': len(entities_used),
        'entities_used': entities_used,
        'has_adequate_length': words >= MIN_WORD_COUNT,
        'has_optimal_keyword_density': _in_range(density, KEYWORD_DENSITY_RANGE),
        'entity_coverage': round(len(entities_used) / len(names) * 100, 1) if names else 0.0,
    }

    score = 0
    if analysis['has_adequate_length']:
        score += 15
    if analysis['has_optimal_keyword_density']:
        score += 10
    score += min(len(entities_used) * ENTITY_POINTS, ENTITY_BONUS_CAP)
    analysis['score'] = score
    return analysis


def analyze_structure(content: str) -> Dict[str, Any]:
    content = content or ''
    analysis = {
        'has_h1': bool(H1_RE.match(content.strip())),
        'has_h2': bool(H2_RE.search(content)),
        'has_h3': bool(H3_RE.search(content)),
        'has_lists': bool(LIST_RE.search(content)),
        'has_bold_text': bool(BOLD_RE.search(content)),
        'paragraph_count': paragraph_count(content),
    }

    score = 0
    if analysis['has_h1']:
        score += 5
    if analysis['has_h2']:
        score += 8
    if analysis['has_h3']:
        score += 5
    if analysis['has_lists']:
        score += 5
    if analysis['has_bold_text']:
        score += 2
    if analysis['paragraph_count'] >= MIN_PARAGRAPHS:
        score += 5
    analysis['score'] = score
    return analysis


def analyze_keyword_usage(content: str, keyword: str) -> Dict[str, Any]:
    content_lower = (content or '').lower()
    keyword_lower = normalize(keyword)

    if keyword_lower:
        partial = sum(
            len(re.findall(r'\b%s\b' % re.escape(word), content_lower))
            for word in keyword_lower.split()
        )
        heading_re = re.compile(r'^#{1,3}\s.*%s' % re.escape(keyword_lower), re.MULTILINE)
        in_headings = bool(heading_re.search(content_lower))
        in_opening = keyword_lower in content_lower[:OPENING_CHARS]
    else:
        partial, in_headings, in_opening = 0, False, False

    analysis = {
        'exact_matches': count_occurrences(content_lower, keyword_lower),
        'partial_matches': partial,
        'in_headings': in_headings,
        'in_first_paragraph': in_opening,
    }

    score = 0
    if _in_range(analysis['exact_matches'], EXACT_MATCH_RANGE):
        score += 10
    if analysis['in_headings']:
        score += 5
    if analysis['in_first_paragraph']:
        score += 5
    analysis['score'] = score
    return analysis


def build_recommendations(analysis: Dict[str, Dict[str, Any]], keyword: str) -> List[Dict[str, str]]:
    """Advisory messages for each failed check, most important first."""
    title = analysis['title']
    meta = analysis['meta']
    content = analysis['content']
    structure = analysis['structure']
    usage = analysis['keyword']
    recommendations = []

    def add(kind, priority, message):
        recommendations.append({'type': kind, 'priority': priority, 'message': message})

    if not title['has_keyword']:
        add('title', 'high', f'Include "{keyword}" in your page title for better relevance.')
    if not title['is_optimal_length']:
        add('title', 'medium',
            f'Optimize title length to 30-60 characters (currently {title["length"]}).')
    if not meta['has_keyword']:
        add('meta', 'high', f'Include "{keyword}" in your meta description.')
    if not meta['is_optimal_length']:
        add('meta', 'medium',
            f'Optimize meta description length to 120-160 characters (currently {meta["length"]}).')
    if not content['has_adequate_length']:
        add('content', 'high',
            f'Increase content length to at least 800 words (currently {content["word_count"]}).')
    if not content['has_optimal_keyword_density']:
        add('content', 'medium',
            f'Optimize keyword density to 0.5-3.0% (currently {content["keyword_density"]:.2f}%).')
    if not structure['has_h2']:
        add('structure', 'medium', 'Add H2 headings to improve content structure and readability.')
    if not usage['in_first_paragraph']:
        add('keyword', 'low', f'Mention "{keyword}" within the first 200 characters.')
    return recommendations


def score_content(
    title: str = '',
    meta_description: str = '',
    content: str = '',
    target_keyword: str = '',
    entities: Iterable = (),
) -> Dict[str, Any]:
    """
    Score content against the heuristic SEO rules.

    Args:
        title: Page title
        meta_description: Meta description
        content: Markdown body
        target_keyword: Keyword the page should rank for (blank disables keyword bonuses)
        entities: Entity dicts ({'name': ...}) or strings expected in the body

    Returns:
        Dict with score (0-100), subscores, recommendations and the per-check analysis
    """
    keyword = (target_keyword or '').strip()
    entities = list(entities or [])

    analysis = {
        'title': analyze_title(title, keyword),
        'meta': analyze_meta_description(meta_description, keyword),
        'content': analyze_content(content, keyword, entities),
        'structure': analyze_structure(content),
        'keyword': analyze_keyword_usage(content, keyword),
    }
    subscores = {
        'title_score': analysis['title']['score'],
        'meta_score': analysis['meta']['score'],
        'content_score': analysis['content']['score'],
        'structure_score': analysis['structure']['score'],
        'keyword_score': analysis['keyword']['score'],
    }
    total = max(0, min(sum(subscores.values()), MAX_SCORE))
    logger.debug(f"Scored content for '{keyword}': {total} {subscores}")

    return {
        'score': total,
        'subscores': subscores,
        'recommendations': build_recommendations(analysis, keyword),
        'analysis': analysis,
    }
