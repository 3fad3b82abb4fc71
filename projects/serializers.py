"""
Serializers for Project model and project actions.
"""
from rest_framework import serializers
from seo.serializers import EntityListField
from seo.serp import INVALID_URL_MESSAGE, validate_url
from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    """Serializer for Project model (also accepts the wizard payload)."""
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Project
        fields = (
            'id', 'name', 'display_name', 'target_keyword', 'business_type',
            'website_url', 'location', 'language', 'tone_of_voice', 'additional_info',
            'status', 'seo_score', 'content_count', 'created_at', 'updated_at'
        )
        read_only_fields = ('id', 'seo_score', 'content_count', 'created_at', 'updated_at')

    def validate_target_keyword(self, value):
        """Keyword is required and stored without surrounding whitespace."""
        value = (value or '').strip()
        if not value:
            raise serializers.ValidationError("Target keyword is required.")
        return value

    def validate_website_url(self, value):
        """Only http(s) URLs can be analyzed."""
        if value and not validate_url(value):
            raise serializers.ValidationError(INVALID_URL_MESSAGE)
        return value


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for project lists and dashboard cards."""

    class Meta:
        model = Project
        fields = (
            'id', 'name', 'target_keyword', 'business_type', 'status',
            'seo_score', 'content_count', 'created_at'
        )


class ProjectScoreSerializer(serializers.Serializer):
    """Body for POST /api/v1/projects/{id}/update-score/."""
    seo_score = serializers.IntegerField(min_value=0, max_value=100)


class ProjectGenerateSerializer(serializers.Serializer):
    """Body for POST /api/v1/projects/{id}/generate-content/."""
    entities = EntityListField(required=False, default=list)
    save = serializers.BooleanField(required=False, default=False)


class ProjectSerpSerializer(serializers.Serializer):
    """Optional body for POST /api/v1/projects/{id}/serp-analysis/."""
    result_count = serializers.IntegerField(required=False, min_value=1, max_value=50, default=10)
    entity_limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=20)
