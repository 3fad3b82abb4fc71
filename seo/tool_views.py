"""
Stateless SEO tool endpoints.

These run the engine on request data without touching the database, so the
frontend can score or draft content before a project exists.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .content_generation import ContentGenerationError, generate_article
from .content_scoring import score_content
from .keyword_density import analyze_keyword_density
from .serializers import (
    GenerateRequestSerializer,
    KeywordDensityRequestSerializer,
    ScoreRequestSerializer,
    SerpRequestSerializer,
)
from .serp import SERPAnalysisError, analyze_serp

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def score_content_view(request):
    """
    Score arbitrary content.

    POST /api/v1/seo/score/
    Body: { "title", "meta_description", "content", "target_keyword", "entities" }

    Returns: { "score", "subscores", "recommendations", "analysis" }
    """
    serializer = ScoreRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    return Response(score_content(**serializer.validated_data))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_content_view(request):
    """
    Generate a templated article and score it.

    POST /api/v1/seo/generate/
    Body: { "target_keyword", "business_type", "location", "tone_of_voice", "entities" }

    Returns: { "content": {...}, "seo": {...} }
    """
    serializer = GenerateRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    try:
        article = generate_article(**data)
    except ContentGenerationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    analysis = score_content(
        title=article['title'],
        meta_description=article['meta_description'],
        content=article['body'],
        target_keyword=data['target_keyword'],
        entities=data['entities'],
    )
    logger.info(f"Generated article for '{data['target_keyword']}' scoring {analysis['score']}")
    return Response({'content': article, 'seo': analysis})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def keyword_density_view(request):
    """
    POST /api/v1/seo/keyword-density/
    Body: { "text": "...", "top_n": 30 }
    """
    serializer = KeywordDensityRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    return Response(analyze_keyword_density(
        serializer.validated_data['text'],
        top_n=serializer.validated_data['top_n'],
    ))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def serp_analysis_view(request):
    """
    Mock SERP analysis for a keyword, or a website report when a URL is given.

    POST /api/v1/seo/serp/
    Body: { "keyword": "...", "url": "https://..." (optional) }
    """
    serializer = SerpRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = analyze_serp(
            serializer.validated_data['keyword'],
            url=serializer.validated_data['url'] or None,
        )
    except SERPAnalysisError as e:
        logger.warning(f"SERP analysis rejected: {e}")
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return Response(result)
