"""
Mock SERP and website analysis.

Nothing here talks to a search engine: results are drawn from fixed templates
with random variation so the dashboard has realistic-looking data to work with.
Pass a seeded random.Random as `rng` to get reproducible output.
"""
import hashlib
import logging
import random
import re
from collections import Counter
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

logger = logging.getLogger(__name__)

DEFAULT_RESULT_COUNT = 10
DEFAULT_ENTITY_LIMIT = 20
MAX_RESULT_ENTITIES = 12
MAX_RESULT_KEYWORDS = 8

TITLE_TEMPLATES = [
    '{keyword} - Complete Guide | {site}',
    'Best {keyword} Solutions for {year} | {site}',
    '{keyword}: Expert Tips & Strategies | {site}',
    'How to Master {keyword} | {site}',
    '{keyword} Made Simple | {site}',
    'Ultimate {keyword} Resource | {site}',
    '{keyword} Best Practices | {site}',
    'Professional {keyword} Services | {site}',
    '{keyword} for Beginners | {site}',
    'Advanced {keyword} Techniques | {site}',
]

DESCRIPTION_TEMPLATES = [
    'Discover the best {keyword} strategies and techniques. {base}',
    'Learn {keyword} from experts. {base}',
    'Master {keyword} with our comprehensive guide. {base}',
    'Get started with {keyword} today. {base}',
    'Professional {keyword} solutions and services. {base}',
    'Everything you need to know about {keyword}. {base}',
    '{keyword} made easy with step-by-step instructions. {base}',
    'Transform your approach to {keyword}. {base}',
    'Unlock the power of {keyword} for better results. {base}',
    'Expert {keyword} advice and best practices. {base}',
]

RELATED_TERMS = ['best', 'guide', 'tips', 'strategies', 'solutions']

COMMON_ENTITIES = [
    'strategy', 'implementation', 'optimization', 'analysis', 'planning',
    'management', 'development', 'performance', 'efficiency', 'innovation',
    'technology', 'automation', 'integration', 'scalability', 'ROI',
    'KPI', 'metrics', 'analytics', 'insights', 'trends',
]

HEADING_STRUCTURES = [
    'Well structured with proper hierarchy',
    'Good structure with minor improvements needed',
    'Needs improvement in heading hierarchy',
    'Excellent heading structure and organization',
]

INVALID_URL_MESSAGE = 'Please enter a valid URL (including http:// or https://)'


class SERPAnalysisError(ValueError):
    """Raised when SERP analysis is requested without usable input."""


class InvalidURLError(SERPAnalysisError):
    """Raised for URLs that are not well-formed http(s) addresses."""


def _rng(rng):
    return rng if rng is not None else random.Random()


def validate_url(url) -> bool:
    """True for well-formed http/https URLs with a host."""
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc) and bool(parsed.hostname)


# =============================================================================
# SERP RESULTS + ENTITY EXTRACTION
# =============================================================================

def generate_keywords(keyword: str) -> List[str]:
    """Related search phrases for a keyword."""
    keyword = keyword.strip()
    base_words = keyword.lower().split()
    keywords = [
        keyword,
        f'best {keyword}',
        f'{keyword} guide',
        f'{keyword} tips',
        f'how to {keyword}',
    ]
    keywords += [f'{word} solutions' for word in base_words]
    keywords += [f'{term} {keyword}' for term in RELATED_TERMS]
    return keywords[:MAX_RESULT_KEYWORDS]


def generate_entities(keyword: str, rng: Optional[random.Random] = None) -> List[str]:
    """The keyword's own words plus a random-length slice of common entities."""
    rng = _rng(rng)
    entities = keyword.lower().split()
    entities += COMMON_ENTITIES[:rng.randint(5, 12)]
    return entities[:MAX_RESULT_ENTITIES]


def generate_serp_results(
    keyword: str,
    count: int = DEFAULT_RESULT_COUNT,
    rng: Optional[random.Random] = None,
) -> List[Dict[str, Any]]:
    """Build `count` templated search results for a keyword."""
    keyword = (keyword or '').strip()
    if not keyword:
        raise SERPAnalysisError('Keyword is required for SERP analysis.')
    rng = _rng(rng)
    year = timezone.now().year

    results = []
    for index in range(count):
        position = index + 1
        domain = f'example{position}.com'
        site = f'Example Site {position}'
        results.append({
            'id': position,
            'position': position,
            'title': rng.choice(TITLE_TEMPLATES).format(keyword=keyword, site=site, year=year),
            'description': rng.choice(DESCRIPTION_TEMPLATES).format(
                keyword=keyword, base='Professional services and solutions.'
            ),
            'url': f'https://{domain}',
            'domain': domain,
            'keywords': generate_keywords(keyword),
            'entities': generate_entities(keyword, rng),
            'seo_score': rng.randint(60, 99),
        })
    return results


def extract_entities(results: List[Dict[str, Any]], limit: int = DEFAULT_ENTITY_LIMIT) -> List[Dict[str, Any]]:
    """Count entity mentions across results; most frequent first."""
    counts = Counter()
    for result in results:
        counts.update(result.get('entities') or [])
    return [{'name': name, 'count': count} for name, count in counts.most_common(limit)]


def analyze_serp(keyword: str, url: Optional[str] = None, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    SERP analysis for a keyword.

    With a URL this is a website analysis for that keyword; otherwise it returns
    mock results and the entities extracted from them.
    """
    if url:
        return analyze_website(url, keyword, rng=rng)

    results = generate_serp_results(keyword, rng=rng)
    entities = extract_entities(results)
    logger.info(f"SERP analysis for '{keyword.strip()}': {len(results)} results, {len(entities)} entities")
    return {
        'keyword': keyword.strip(),
        'results': results,
        'entities': entities,
    }


# =============================================================================
# WEBSITE ANALYSIS
# =============================================================================

def extract_main_keyword(domain: str) -> str:
    """Guess a keyword from a domain name, e.g. green-garden.co -> 'green garden'."""
    stripped = re.sub(r'\.(com|org|net|io|co|uk)$', '', domain, flags=re.IGNORECASE)
    words = [w for w in re.split(r'[-.]', stripped) if len(w) > 2]
    return ' '.join(words) or domain


def calculate_url_seo_score(url: str, keyword: Optional[str], rng: Optional[random.Random] = None) -> int:
    """URL-structure heuristics plus random jitter, clamped to 30-100."""
    rng = _rng(rng)
    parsed = urlparse(url)
    path = parsed.path or '/'
    host = (parsed.hostname or '').lower()
    keyword_lower = (keyword or '').lower().strip()

    score = 50
    if keyword_lower and keyword_lower in path.lower():
        score += 10
    if len(path.split('/')) <= 4:
        score += 5
    if '_' not in path:
        score += 5
    if keyword_lower and keyword_lower in host:
        score += 15
    if parsed.scheme == 'https':
        score += 10
    score += rng.randint(-10, 9)
    return max(30, min(100, score))


def generate_meta_title(domain: str, keyword: Optional[str], rng: random.Random) -> str:
    business = domain.split('.')[0]
    templates = [
        f"{keyword + ' | ' if keyword else ''}{business} - Professional Services",
        f"Best {keyword or 'Solutions'} from {business}",
        f"{business} - Your {keyword or 'Business'} Partner",
        f"{keyword + ' Experts' if keyword else 'Professional Services'} | {business}",
    ]
    return rng.choice(templates)


def generate_meta_description(domain: str, keyword: Optional[str], rng: random.Random) -> str:
    business = domain.split('.')[0]
    templates = [
        f"Discover {keyword or 'professional services'} with {business}. Expert solutions, proven results, and exceptional customer service.",
        f"{business} provides top-quality {keyword or 'services'} with a focus on innovation and customer satisfaction.",
        f"Get the best {keyword or 'solutions'} from {business}. Trusted by thousands of customers worldwide.",
        f"Professional {keyword or 'services'} by {business}. Contact us today for a free consultation and quote.",
    ]
    return rng.choice(templates)


def website_recommendations(seo_score: int, keyword: Optional[str]) -> List[Dict[str, str]]:
    recommendations = []
    if seo_score < 70:
        recommendations.append({
            'priority': 'high',
            'category': 'Technical SEO',
            'title': 'Improve page load speed',
            'description': 'Optimize images and reduce server response time to improve user experience and search rankings.',
        })
    if keyword:
        recommendations.append({
            'priority': 'medium',
            'category': 'Content',
            'title': f'Optimize content for "{keyword}"',
            'description': 'Improve keyword density and semantic relevance in your content.',
        })
    recommendations.append({
        'priority': 'high' if seo_score < 60 else 'low',
        'category': 'Meta Tags',
        'title': 'Optimize meta descriptions',
        'description': 'Write compelling meta descriptions that include target keywords and encourage clicks.',
    })
    return recommendations


def _competitors(rng):
    return [
        {
            'domain': f'competitor{n}.com',
            'seo_score': rng.randint(60, 99),
            'estimated_traffic': rng.randint(10000, 59999),
            'backlinks': rng.randint(1000, 5999),
        }
        for n in range(1, 4)
    ]


def _build_website_report(url, keyword, rng):
    parsed = urlparse(url)
    domain = parsed.hostname
    seo_score = calculate_url_seo_score(url, keyword, rng)
    page_speed = rng.randint(60, 99)

    return {
        'url': url,
        'domain': domain,
        'seo_score': seo_score,
        'keyword': keyword or extract_main_keyword(domain),
        'metrics': {
            'page_speed': page_speed,
            'mobile_score': rng.randint(70, 99),
            'accessibility': rng.randint(80, 99),
            'best_practices': rng.randint(75, 99),
            'performance': page_speed,
            'seo': seo_score,
        },
        'technical_seo': {
            'meta_title': generate_meta_title(domain, keyword, rng),
            'meta_description': generate_meta_description(domain, keyword, rng),
            'headings': {
                'h1': rng.randint(1, 3),
                'h2': rng.randint(2, 9),
                'h3': rng.randint(5, 19),
                'h4': rng.randint(2, 11),
                'keyword_in_h1': bool(keyword) and rng.random() > 0.3,
                'keyword_in_h2': bool(keyword) and rng.random() > 0.5,
            },
            'images': {
                'total': rng.randint(10, 59),
                'with_alt': rng.randint(20, 49),
                'optimized': rng.randint(15, 39),
            },
            'links': {
                'internal': rng.randint(20, 119),
                'external': rng.randint(5, 34),
                'broken': rng.randint(0, 4),
            },
        },
        'content_analysis': {
            'word_count': rng.randint(500, 2499),
            'readability_score': rng.randint(70, 99),
            'keyword_density': round(rng.uniform(0.5, 3.5), 2) if keyword else None,
            'headings_structure': rng.choice(HEADING_STRUCTURES),
        },
        'competitor_analysis': _competitors(rng),
        'recommendations': website_recommendations(seo_score, keyword),
        'last_analyzed': timezone.now().isoformat(),
    }


def analyze_website(url: str, keyword: Optional[str] = None, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    Mock technical SEO report for a website.

    Reports are cached per (url, keyword) for SERP_CACHE_SECONDS.

    Raises:
        InvalidURLError: url is not a well-formed http(s) URL
    """
    if not validate_url(url):
        raise InvalidURLError(INVALID_URL_MESSAGE)
    url = url.strip()
    keyword = (keyword or '').strip() or None

    digest = hashlib.md5(f"{url}|{keyword or ''}".encode('utf-8')).hexdigest()
    cache_key = f"website-analysis:{digest}"
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug(f"Website analysis cache hit for {url}")
        return cached

    report = _build_website_report(url, keyword, _rng(rng))
    cache.set(cache_key, report, getattr(settings, 'SERP_CACHE_SECONDS', 300))
    logger.info(f"Website analysis for {url}: score {report['seo_score']}")
    return report
