"""
Views for Content management.
"""
import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from projects.permissions import IsContentOwner

from .keyword_density import analyze_keyword_density
from .models import Content
from .serializers import ContentSerializer, ContentListSerializer

logger = logging.getLogger(__name__)


class ContentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for viewing and managing content.

    list: GET /api/v1/content/ - List content (filtered by project_id)
    create: POST /api/v1/content/ - Create content; it is scored on save
    retrieve: GET /api/v1/content/{id}/ - Get content details
    update: PUT/PATCH /api/v1/content/{id}/ - Update content; it is rescored
    destroy: DELETE /api/v1/content/{id}/ - Delete content
    rescore: POST /api/v1/content/{id}/rescore/ - Recompute the SEO score
    keyword_density: GET /api/v1/content/{id}/keyword-density/ - Word cloud for the body
    """
    permission_classes = [IsAuthenticated, IsContentOwner]

    def get_queryset(self):
        """Return content for projects owned by the current user."""
        queryset = Content.objects.filter(project__user=self.request.user)

        project_id = self.request.query_params.get('project_id')
        if project_id:
            queryset = queryset.filter(project_id=project_id)

        return queryset.select_related('project')

    def get_serializer_class(self):
        """Use lightweight serializer for list, full serializer for detail."""
        if self.action == 'list':
            return ContentListSerializer
        return ContentSerializer

    def perform_create(self, serializer):
        content = serializer.save()
        content.rescore()
        content.project.record_content(score=content.seo_score)
        logger.info(f"Content {content.id} created for project {content.project_id} (score {content.seo_score})")

    def perform_update(self, serializer):
        content = serializer.save()
        content.rescore()
        content.project.update_seo_score(content.seo_score)
        logger.info(f"Content {content.id} updated (score {content.seo_score})")

    @action(detail=True, methods=['post'])
    def rescore(self, request, pk=None):
        """
        Recompute the SEO score for a piece of content.

        POST /api/v1/content/{id}/rescore/

        Returns the full analysis; the content's score is updated in place.
        """
        content = self.get_object()
        result = content.rescore()
        logger.info(f"Content {content.id} rescored: {result['score']}")
        return Response({
            'content_id': content.id,
            **result,
        })

    @action(detail=True, methods=['get'], url_path='keyword-density')
    def keyword_density(self, request, pk=None):
        """
        Keyword density of the content body.

        GET /api/v1/content/{id}/keyword-density/
        """
        content = self.get_object()
        result = analyze_keyword_density(content.body)
        return Response({
            'content_id': content.id,
            **result,
        })
