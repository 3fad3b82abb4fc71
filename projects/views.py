"""
Views for Project management and project-level SEO actions.
"""
import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction

from seo.content_generation import ContentGenerationError, generate_article
from seo.content_scoring import score_content
from seo.models import Content
from seo.serializers import ContentSerializer
from seo.serp import SERPAnalysisError, analyze_website, extract_entities, generate_serp_results
from .models import Project
from .permissions import IsProjectOwner
from .reports import build_chart_data, summarize_projects
from .serializers import (
    ProjectGenerateSerializer,
    ProjectListSerializer,
    ProjectScoreSerializer,
    ProjectSerializer,
    ProjectSerpSerializer,
)

logger = logging.getLogger(__name__)

DASHBOARD_RECENT_LIMIT = 6


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing projects.

    list: GET /api/v1/projects/ - List all projects for current user
    create: POST /api/v1/projects/ - Create a project from the wizard payload
    retrieve: GET /api/v1/projects/{id}/ - Get project details
    update: PUT /api/v1/projects/{id}/ - Update project
    destroy: DELETE /api/v1/projects/{id}/ - Delete project and its content
    serp_analysis: POST /api/v1/projects/{id}/serp-analysis/ - Mock SERP + entities
    website_analysis: POST /api/v1/projects/{id}/website-analysis/ - Mock website report
    generate_content: POST /api/v1/projects/{id}/generate-content/ - Template article + score
    update_score: POST /api/v1/projects/{id}/update-score/ - Set the project score
    dashboard: GET /api/v1/projects/dashboard/ - Headline stats + recent projects
    reports: GET /api/v1/projects/reports/ - Headline stats + chart series
    """
    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]

    def get_queryset(self):
        """Return only projects owned by the current user; optional ?status= filter."""
        queryset = Project.objects.filter(user=self.request.user)
        project_status = self.request.query_params.get('status')
        if project_status:
            queryset = queryset.filter(status=project_status)
        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return ProjectListSerializer
        return ProjectSerializer

    def perform_create(self, serializer):
        """Set the user when creating a project."""
        project = serializer.save(user=self.request.user)
        logger.info(f"Project {project.id} created for '{project.target_keyword}'")

    @action(detail=True, methods=['post'], url_path='serp-analysis')
    def serp_analysis(self, request, pk=None):
        """
        Run mock SERP analysis for the project keyword and extract entities.

        POST /api/v1/projects/{id}/serp-analysis/
        Body (optional): { "result_count": 10, "entity_limit": 20 }
        """
        project = self.get_object()
        serializer = ProjectSerpSerializer(data=request.data or {})
        serializer.is_valid(raise_exception=True)

        try:
            results = generate_serp_results(
                project.target_keyword, count=serializer.validated_data['result_count']
            )
        except SERPAnalysisError as e:
            logger.warning(f"SERP analysis rejected for project {project.id}: {e}")
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        entities = extract_entities(results, limit=serializer.validated_data['entity_limit'])
        return Response({
            'project_id': project.id,
            'keyword': project.target_keyword,
            'results': results,
            'entities': entities,
            'entity_count': len(entities),
            'avg_entity_frequency': round(sum(e['count'] for e in entities) / len(results), 2),
        })

    @action(detail=True, methods=['post'], url_path='website-analysis')
    def website_analysis(self, request, pk=None):
        """
        Mock technical SEO report for the project's website.

        POST /api/v1/projects/{id}/website-analysis/
        """
        project = self.get_object()
        if not project.website_url:
            return Response(
                {'error': 'Project has no website URL'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            report = analyze_website(project.website_url, project.target_keyword)
        except SERPAnalysisError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(report)

    @action(detail=True, methods=['post'], url_path='generate-content')
    def generate_content(self, request, pk=None):
        """
        Generate a templated article for the project and score it.

        POST /api/v1/projects/{id}/generate-content/
        Body: { "entities": [{"name": "strategy", "count": 10}, ...], "save": false }

        With "save": true the article is stored as Draft content and the project's
        content count and score are updated.
        """
        project = self.get_object()
        serializer = ProjectGenerateSerializer(data=request.data or {})
        serializer.is_valid(raise_exception=True)
        entities = serializer.validated_data['entities']

        try:
            article = generate_article(
                target_keyword=project.target_keyword,
                business_type=project.business_type,
                location=project.location,
                tone_of_voice=project.tone_of_voice,
                entities=entities,
            )
        except ContentGenerationError as e:
            logger.warning(f"Content generation rejected for project {project.id}: {e}")
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        analysis = score_content(
            title=article['title'],
            meta_description=article['meta_description'],
            content=article['body'],
            target_keyword=project.target_keyword,
            entities=entities,
        )
        response_data = {
            'project_id': project.id,
            'content': article,
            'seo': analysis,
        }

        if serializer.validated_data['save']:
            with transaction.atomic():
                content = Content.objects.create(
                    project=project,
                    title=article['title'],
                    meta_description=article['meta_description'],
                    body=article['body'],
                    faq_section=article['faq_section'],
                    entities=entities,
                    seo_score=analysis['score'],
                )
                project.record_content(score=analysis['score'])
            logger.info(f"Saved generated content {content.id} for project {project.id}")
            response_data['saved_content'] = ContentSerializer(content).data
            return Response(response_data, status=status.HTTP_201_CREATED)

        return Response(response_data)

    @action(detail=True, methods=['post'], url_path='update-score')
    def update_score(self, request, pk=None):
        """
        Set the project's SEO score.

        POST /api/v1/projects/{id}/update-score/
        Body: { "seo_score": 82 }
        """
        project = self.get_object()
        serializer = ProjectScoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project.update_seo_score(serializer.validated_data['seo_score'])
        logger.info(f"Project {project.id} score set to {project.seo_score}")
        return Response(ProjectSerializer(project).data)

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """
        Headline stats and the most recent projects.

        GET /api/v1/projects/dashboard/
        """
        projects = list(self.get_queryset())
        total_content = Content.objects.filter(project__user=request.user).count()
        return Response({
            'stats': summarize_projects(projects, total_content),
            'recent_projects': ProjectListSerializer(projects[:DASHBOARD_RECENT_LIMIT], many=True).data,
        })

    @action(detail=False, methods=['get'])
    def reports(self, request):
        """
        Aggregate performance across projects for the reports page.

        GET /api/v1/projects/reports/
        """
        projects = list(self.get_queryset())
        total_content = Content.objects.filter(project__user=request.user).count()
        return Response({
            'stats': summarize_projects(projects, total_content),
            'charts': build_chart_data(projects),
        })
