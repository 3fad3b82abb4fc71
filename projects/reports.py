"""
Dashboard and report aggregation across a user's projects.

Works on Project instances or plain dicts with the same field names, so the
numbers can be computed without touching the database.
"""
from collections import Counter
from typing import Any, Dict, Iterable, Optional

IMPROVEMENT_THRESHOLD = 70
TREND_UP = 75
TREND_NEUTRAL = 50
CATEGORY_LABEL_LENGTH = 20


def _field(project, name, default=None):
    if isinstance(project, dict):
        value = project.get(name, default)
    else:
        value = getattr(project, name, default)
    return default if value is None else value


def _score(project) -> int:
    return _field(project, 'seo_score', 0) or 0


def score_trend(score: float) -> str:
    """Dashboard arrow for an average score."""
    if score >= TREND_UP:
        return 'up'
    if score >= TREND_NEUTRAL:
        return 'neutral'
    return 'down'


def _project_card(project) -> Optional[Dict[str, Any]]:
    if project is None:
        return None
    return {
        'id': _field(project, 'id'),
        'target_keyword': _field(project, 'target_keyword', ''),
        'business_type': _field(project, 'business_type', ''),
        'seo_score': _score(project),
    }


def summarize_projects(projects: Iterable, total_content: int = 0) -> Dict[str, Any]:
    """
    Headline numbers for the dashboard.

    Returns:
        total_projects, active_projects, total_content, avg_seo_score (rounded),
        score_trend, top_performer (None when there are no projects) and
        improvement_opportunities (projects scoring under 70)
    """
    projects = list(projects)
    total = len(projects)
    avg_score = round(sum(_score(p) for p in projects) / total) if total else 0

    top_performer = None
    for project in projects:
        if top_performer is None or _score(project) > _score(top_performer):
            top_performer = project

    return {
        'total_projects': total,
        'active_projects': sum(1 for p in projects if _field(p, 'status') == 'Active'),
        'total_content': total_content,
        'avg_seo_score': avg_score,
        'score_trend': score_trend(avg_score),
        'top_performer': _project_card(top_performer),
        'improvement_opportunities': sum(1 for p in projects if _score(p) < IMPROVEMENT_THRESHOLD),
    }


def _keyword_label(keyword: str) -> str:
    return (keyword or '')[:CATEGORY_LABEL_LENGTH] + '...'


def build_chart_data(projects: Iterable) -> Dict[str, Any]:
    """Series for the SEO trend, content performance and business-type charts."""
    projects = list(projects)
    scores = [_score(p) for p in projects]
    distribution = Counter(_field(p, 'business_type', 'Other') for p in projects)

    return {
        'seo_trends': {
            'series': [{'name': 'SEO Score', 'data': scores}],
            'categories': [_keyword_label(_field(p, 'target_keyword', '')) for p in projects],
        },
        'content_performance': {
            'series': [
                {'name': 'Content Count', 'data': [_field(p, 'content_count', 0) for p in projects]},
                {'name': 'SEO Score', 'data': scores},
            ],
            'categories': [_field(p, 'business_type', '') for p in projects],
        },
        'business_type_distribution': {
            'series': list(distribution.values()),
            'labels': list(distribution.keys()),
        },
    }
