"""
Tests for seo app - scoring, generation, keyword density, SERP mocks and content API.
"""
import random
import warnings
from datetime import date

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.cache.backends.base import CacheKeyWarning
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from seo.content_generation import ContentGenerationError, generate_article, generate_faqs
from seo.content_scoring import score_content
from seo.keyword_density import analyze_keyword_density, density_category
from seo.serp import (
    INVALID_URL_MESSAGE,
    InvalidURLError,
    SERPAnalysisError,
    analyze_serp,
    analyze_website,
    calculate_url_seo_score,
    extract_entities,
    extract_main_keyword,
    generate_keywords,
    generate_serp_results,
    validate_url,
)
from seo.text_utils import count_occurrences, paragraph_count, word_count


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_model():
    return get_user_model()


@pytest.fixture
def create_user(user_model):
    def _create_user(email="test@example.com", password="testpass123"):
        return user_model.objects.create_user(
            email=email,
            username=email,
            password=password
        )
    return _create_user


@pytest.fixture
def authenticated_client(api_client, create_user):
    user = create_user()
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {str(refresh.access_token)}')
    return api_client, user


@pytest.fixture
def create_project(create_user):
    def _create_project(user=None, target_keyword="widgets", business_type="E-commerce"):
        from projects.models import Project
        if user is None:
            user = create_user()
        return Project.objects.create(user=user, target_keyword=target_keyword, business_type=business_type)
    return _create_project


@pytest.fixture
def create_content(create_project):
    def _create_content(project=None, title="Widgets buying guide", body="# Widgets\n\nAll about widgets."):
        from seo.models import Content
        if project is None:
            project = create_project()
        return Content.objects.create(project=project, title=title, body=body)
    return _create_content


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


def long_body(keyword="widgets", paragraphs=3, words_per_paragraph=300):
    """Paragraphs that each mention the keyword once."""
    return '\n\n'.join(
        ' '.join([keyword] + ['filler'] * (words_per_paragraph - 1))
        for _ in range(paragraphs)
    )


MAX_TITLE = 'widgets guide for modern small business owners'
MAX_META = (
    'Discover widgets for every project. '
    'Learn the essentials of choosing, fitting and caring for them across homes and offices.'
)
MAX_BODY = (
    '# widgets handbook\n\n'
    '## widgets basics\n\n'
    '### details\n\n'
    '- item\n\n'
    '**bold**\n\n'
    + long_body()
)


class TestTextUtils:

    def test_word_count(self):
        assert word_count('') == 0
        assert word_count(None) == 0
        assert word_count('  one two\nthree\t four ') == 4

    def test_paragraph_count(self):
        assert paragraph_count('') == 0
        assert paragraph_count('a\n\nb\n  \nc') == 3

    def test_count_occurrences_is_case_insensitive(self):
        assert count_occurrences('SEO tips, seo tricks, Seo', 'seo') == 3
        assert count_occurrences('anything', '') == 0


class TestContentScoring:

    def test_empty_input_scores_zero(self):
        result = score_content()
        assert result['score'] == 0
        assert set(result['subscores'].values()) == {0}
        assert len(result['recommendations']) == 8
        assert 'currently 0.00%' in result['recommendations'][5]['message']

    def test_short_title_with_keyword_at_start(self):
        result = score_content(title='SEO Guide', target_keyword='SEO')
        assert result['subscores']['title_score'] == 20
        assert result['analysis']['title']['keyword_position'] == 0

    def test_position_bonus_needs_keyword(self):
        result = score_content(title='A guide to everything', target_keyword='seo')
        assert result['analysis']['title']['has_keyword'] is False
        assert result['subscores']['title_score'] == 0

    def test_long_content_with_optimal_density(self):
        content = '\n\n'.join(
            ' '.join(['widgets'] + ['filler'] * 99) for _ in range(8)
        )
        result = score_content(content=content, target_keyword='widgets')
        analysis = result['analysis']['content']
        assert analysis['word_count'] == 800
        assert analysis['keyword_density'] == 1.0
        assert result['subscores']['content_score'] == 25
        assert result['analysis']['keyword']['exact_matches'] == 8
        assert result['subscores']['keyword_score'] == 15

    def test_total_is_capped_at_100(self):
        entities = ['filler', 'item', 'details', 'bold', 'handbook', 'basics', 'widgets', 'missing']
        result = score_content(MAX_TITLE, MAX_META, MAX_BODY, 'widgets', entities)
        assert sum(result['subscores'].values()) > 100
        assert result['score'] == 100
        assert result['analysis']['content']['entities_used'] == entities[:7]
        assert result['analysis']['content']['entity_coverage'] == 87.5

    def test_entity_bonus_is_capped(self):
        entities = [{'name': f'term{n}', 'count': 1} for n in range(10)]
        content = ' '.join(f'term{n}' for n in range(10))
        result = score_content(content=content, entities=entities)
        assert result['analysis']['content']['entity_usage'] == 10
        assert result['subscores']['content_score'] == 15

    def test_blank_keyword_earns_no_keyword_points(self):
        result = score_content(MAX_TITLE, MAX_META, MAX_BODY, '   ')
        assert result['analysis']['title']['has_keyword'] is False
        assert result['analysis']['meta']['has_keyword'] is False
        assert result['subscores']['keyword_score'] == 0
        assert result['subscores']['title_score'] == 10

    def test_scoring_is_idempotent(self):
        first = score_content(MAX_TITLE, MAX_META, MAX_BODY, 'widgets')
        second = score_content(MAX_TITLE, MAX_META, MAX_BODY, 'widgets')
        assert first == second

    def test_structure_checks(self):
        result = score_content(content='# Title\n\nplain text')
        structure = result['analysis']['structure']
        assert structure['has_h1'] is True
        assert structure['has_h2'] is False
        assert result['subscores']['structure_score'] == 5

    def test_generated_article_scores_well(self):
        article = generate_article('content marketing', 'SaaS', entities=['strategy'], year=2025)
        result = score_content(
            article['title'], article['meta_description'], article['body'], 'content marketing', ['strategy']
        )
        assert result['subscores']['title_score'] == 30
        assert result['subscores']['meta_score'] == 25
        assert result['subscores']['structure_score'] == 30
        assert 0 <= result['score'] <= 100


class TestContentGeneration:

    def test_title_and_meta(self):
        article = generate_article('local seo', 'Local Business', location='Austin', year=2025)
        assert article['title'] == 'local seo for Local Business: Complete 2025 Strategy Guide'
        assert article['meta_description'].startswith('Master local seo strategies')
        assert ' in Austin.' in article['meta_description']
        assert '## Regional Considerations for Austin' in article['body']

    def test_year_defaults_to_current(self):
        article = generate_article('seo', 'SaaS')
        assert str(date.today().year) in article['title']

    def test_body_is_markdown_with_entities(self):
        article = generate_article('seo', 'SaaS', entities=[{'name': 'backlinks', 'count': 4}, 'schema'])
        body = article['body']
        assert body.startswith('# seo: The Complete SaaS Strategy Guide')
        assert '- **backlinks**:' in body
        assert '- **schema**:' in body
        assert '- **Customer Experience**:' not in body

    def test_fallback_applications_without_entities(self):
        article = generate_article('seo', 'SaaS')
        assert '- **Customer Experience**:' in article['body']

    def test_tone_changes_copy(self):
        formal = generate_article('seo', 'SaaS', tone_of_voice='Professional', year=2025)
        friendly = generate_article('seo', 'SaaS', tone_of_voice='Friendly', year=2025)
        assert 'engaging experienced professionals' in formal['body']
        assert 'Ready to get started?' in friendly['body']
        assert formal['title'] == friendly['title']

    def test_faqs(self):
        faqs = generate_faqs('seo', 'Blog')
        assert len(faqs) == 6
        assert all(set(faq) == {'question', 'answer'} for faq in faqs)
        assert faqs[0]['question'] == 'What is seo and why does it matter for Blog success?'

    @pytest.mark.parametrize('keyword,business', [('', 'SaaS'), ('seo', '  ')])
    def test_requires_keyword_and_business(self, keyword, business):
        with pytest.raises(ContentGenerationError):
            generate_article(keyword, business)


class TestKeywordDensity:

    def test_three_in_a_hundred_is_high(self):
        text = 'python python python ' + ' '.join(['a'] * 97)
        result = analyze_keyword_density(text)
        assert result['total_words'] == 100
        assert result['unique_words'] == 1
        assert result['keywords'] == [
            {'word': 'python', 'count': 3, 'density': 3.0, 'category': 'high'}
        ]

    def test_stop_words_and_short_tokens_are_skipped(self):
        result = analyze_keyword_density('The cat and the dog, the end. Widgets!')
        words = [k['word'] for k in result['keywords']]
        assert 'the' not in words
        assert 'and' not in words
        assert 'widgets' in words

    def test_most_frequent_first_and_top_n(self):
        text = 'alpha beta beta gamma gamma gamma'
        result = analyze_keyword_density(text, top_n=2)
        assert [k['word'] for k in result['keywords']] == ['gamma', 'beta']

    def test_equal_counts_keep_first_appearance_order(self):
        result = analyze_keyword_density('zeta alpha zeta alpha beta')
        assert [k['word'] for k in result['keywords']] == ['zeta', 'alpha', 'beta']

    def test_empty_text(self):
        assert analyze_keyword_density('') == {'keywords': [], 'total_words': 0, 'unique_words': 0}

    def test_density_category(self):
        assert density_category(2.0) == 'high'
        assert density_category(1.0) == 'medium'
        assert density_category(0.99) == 'low'


class TestSerp:

    def test_serp_results_are_reproducible_with_seed(self):
        first = generate_serp_results('seo tools', rng=random.Random(7))
        second = generate_serp_results('seo tools', rng=random.Random(7))
        assert first == second
        assert [r['position'] for r in first] == list(range(1, 11))
        assert first[0]['url'] == 'https://example1.com'
        assert all(60 <= r['seo_score'] <= 99 for r in first)
        assert all(len(r['entities']) <= 12 for r in first)

    def test_serp_requires_keyword(self):
        with pytest.raises(SERPAnalysisError):
            generate_serp_results('  ')

    def test_keywords(self):
        keywords = generate_keywords('seo tools')
        assert len(keywords) == 8
        assert keywords[:3] == ['seo tools', 'best seo tools', 'seo tools guide']

    def test_extract_entities_counts_mentions(self):
        results = generate_serp_results('seo', rng=random.Random(1))
        entities = extract_entities(results, limit=5)
        assert len(entities) == 5
        assert entities[0] == {'name': 'seo', 'count': 10}
        counts = [e['count'] for e in entities]
        assert counts == sorted(counts, reverse=True)

    def test_analyze_serp(self):
        result = analyze_serp(' seo ', rng=random.Random(3))
        assert result['keyword'] == 'seo'
        assert len(result['results']) == 10
        assert result['entities']

    def test_analyze_serp_with_url_returns_website_report(self):
        result = analyze_serp('seo', url='https://shop.example.com', rng=random.Random(3))
        assert result['domain'] == 'shop.example.com'
        assert 'metrics' in result

    @pytest.mark.parametrize('url,valid', [
        ('https://example.com', True),
        ('http://example.com/path?q=1', True),
        ('example.com', False),
        ('ftp://example.com', False),
        ('https://', False),
        ('', False),
        (None, False),
    ])
    def test_validate_url(self, url, valid):
        assert validate_url(url) is valid

    def test_website_analysis_rejects_invalid_url(self):
        with pytest.raises(InvalidURLError) as exc:
            analyze_website('not a url')
        assert str(exc.value) == INVALID_URL_MESSAGE

    def test_website_analysis_is_cached(self):
        first = analyze_website('https://example.com', 'seo', rng=random.Random(1))
        second = analyze_website('https://example.com', 'seo', rng=random.Random(2))
        assert first == second
        other = analyze_website('https://example.com', rng=random.Random(2))
        assert other['keyword'] == 'example'

    def test_website_cache_key_is_safe_for_any_backend(self):
        keyword = 'long tail keyword with spaces ' * 10
        with warnings.catch_warnings():
            warnings.simplefilter('error', CacheKeyWarning)
            first = analyze_website('https://example.com/a path', keyword, rng=random.Random(1))
            second = analyze_website('https://example.com/a path', keyword, rng=random.Random(2))
        assert first == second

    def test_url_score_is_clamped(self):
        for seed in range(20):
            score = calculate_url_seo_score('http://a.com/x_y/z/w/v', None, random.Random(seed))
            assert 30 <= score <= 100

    def test_extract_main_keyword(self):
        assert extract_main_keyword('green-garden.com') == 'green garden'


@pytest.mark.django_db
class TestContentModel:

    def test_word_count_is_derived_from_body(self, create_content):
        content = create_content(body='one two three')
        assert content.word_count == 3
        content.body = 'one two'
        content.save(update_fields=['body'])
        content.refresh_from_db()
        assert content.word_count == 2

    def test_rescore_uses_project_keyword(self, create_content):
        content = create_content()
        result = content.rescore()
        content.refresh_from_db()
        assert content.seo_score == result['score']
        assert result['analysis']['title']['has_keyword'] is True


@pytest.mark.django_db
class TestContentAPI:

    def test_create_content_scores_and_updates_project(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post('/api/v1/content/', {
            'project': project.id,
            'title': MAX_TITLE,
            'meta_description': MAX_META,
            'body': MAX_BODY,
            'entities': [{'name': 'filler', 'count': 3}],
            'faq_section': [{'question': 'Why?', 'answer': 'Because.'}],
        })
        assert response.status_code == 201
        assert response.data['seo_score'] == 100
        assert response.data['entities'] == ['filler']
        assert response.data['target_keyword'] == 'widgets'
        project.refresh_from_db()
        assert project.content_count == 1
        assert project.seo_score == 100

    def test_entities_are_deduplicated_ignoring_case(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post('/api/v1/content/', {
            'project': project.id,
            'title': 'Widgets',
            'entities': ['SEO', {'name': 'seo', 'count': 4}, 'Links', 'links '],
        })
        assert response.status_code == 201
        assert response.data['entities'] == ['SEO', 'Links']

    def test_cannot_create_content_for_other_users_project(self, authenticated_client, create_user, create_project):
        client, _ = authenticated_client
        project = create_project(user=create_user(email='other@example.com'))

        response = client.post('/api/v1/content/', {'project': project.id, 'title': 'Hijack'})
        assert response.status_code == 400
        assert 'project' in response.data

    def test_list_filtered_by_project(self, authenticated_client, create_project, create_content):
        client, user = authenticated_client
        first = create_project(user=user)
        second = create_project(user=user, target_keyword='gadgets')
        create_content(project=first)
        create_content(project=second, title='Gadgets')

        response = client.get('/api/v1/content/', {'project_id': second.id})
        assert response.status_code == 200
        assert [c['title'] for c in response.data['results']] == ['Gadgets']

    def test_other_users_content_is_hidden(self, authenticated_client, create_user, create_project, create_content):
        client, _ = authenticated_client
        content = create_content(project=create_project(user=create_user(email='other@example.com')))

        assert client.get('/api/v1/content/').data['results'] == []
        assert client.get(f'/api/v1/content/{content.id}/').status_code == 404

    def test_update_rescores(self, authenticated_client, create_project, create_content):
        client, user = authenticated_client
        content = create_content(project=create_project(user=user), body='short')

        response = client.patch(f'/api/v1/content/{content.id}/', {'body': MAX_BODY, 'meta_description': MAX_META})
        assert response.status_code == 200
        assert response.data['word_count'] == word_count(MAX_BODY)
        content.refresh_from_db()
        assert content.seo_score == response.data['seo_score']
        assert content.project.seo_score == content.seo_score

    def test_rescore_action(self, authenticated_client, create_project, create_content):
        client, user = authenticated_client
        content = create_content(project=create_project(user=user))

        response = client.post(f'/api/v1/content/{content.id}/rescore/')
        assert response.status_code == 200
        assert response.data['content_id'] == content.id
        assert set(response.data['subscores']) == {
            'title_score', 'meta_score', 'content_score', 'structure_score', 'keyword_score'
        }

    def test_keyword_density_action(self, authenticated_client, create_project, create_content):
        client, user = authenticated_client
        content = create_content(project=create_project(user=user), body='widgets widgets gadgets')

        response = client.get(f'/api/v1/content/{content.id}/keyword-density/')
        assert response.status_code == 200
        assert response.data['keywords'][0] == {
            'word': 'widgets', 'count': 2, 'density': 66.67, 'category': 'high'
        }


@pytest.mark.django_db
class TestSEOToolEndpoints:

    def test_score(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/score/', {'title': 'SEO Guide', 'target_keyword': 'SEO'})
        assert response.status_code == 200
        assert response.data['subscores']['title_score'] == 20

    def test_generate(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/generate/', {
            'target_keyword': 'seo', 'business_type': 'Blog', 'entities': ['links'],
        })
        assert response.status_code == 200
        assert response.data['content']['title'].startswith('seo for Blog')
        assert 0 <= response.data['seo']['score'] <= 100

    def test_generate_requires_business_type(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/generate/', {'target_keyword': 'seo'})
        assert response.status_code == 400

    def test_keyword_density(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/keyword-density/', {'text': 'python python python', 'top_n': 5})
        assert response.status_code == 200
        assert response.data['total_words'] == 3

    def test_serp(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/serp/', {'keyword': 'seo'})
        assert response.status_code == 200
        assert len(response.data['results']) == 10

    def test_serp_invalid_url(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/seo/serp/', {'keyword': 'seo', 'url': 'example'})
        assert response.status_code == 400
        assert response.data['error'] == INVALID_URL_MESSAGE

    def test_tools_accept_token_clients_without_csrf_cookie(self, create_user):
        user = create_user()
        client = APIClient(enforce_csrf_checks=True)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {str(RefreshToken.for_user(user).access_token)}')

        assert client.post('/api/v1/seo/score/', {'title': 'SEO Guide', 'target_keyword': 'SEO'}).status_code == 200
        assert client.post('/api/v1/seo/generate/', {'target_keyword': 'seo', 'business_type': 'Blog'}).status_code == 200
        assert client.post('/api/v1/seo/keyword-density/', {'text': 'python'}).status_code == 200
        assert client.post('/api/v1/seo/serp/', {'keyword': 'seo'}).status_code == 200

    def test_tools_require_authentication(self, api_client):
        response = api_client.post('/api/v1/seo/score/', {'title': 'x'})
        assert response.status_code == 401
