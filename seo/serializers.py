"""
Serializers for Content and the stateless SEO tool endpoints.
"""
from rest_framework import serializers
from .models import Content
from .keyword_density import DEFAULT_TOP_N


class EntityListField(serializers.ListField):
    """Accepts entity dicts ({"name": ..., "count": ...}) or bare names; yields names."""

    def to_internal_value(self, data):
        if not isinstance(data, list):
            raise serializers.ValidationError("Must be a list of entities")
        names = []
        seen = set()
        for item in data:
            name = item.get('name') if isinstance(item, dict) else item
            name = str(name or '').strip()
            if name and name.lower() not in seen:
                seen.add(name.lower())
                names.append(name)
        if len(names) > 50:
            raise serializers.ValidationError("Maximum 50 entities allowed")
        return names


class FAQItemSerializer(serializers.Serializer):
    question = serializers.CharField()
    answer = serializers.CharField(allow_blank=True)


class ContentSerializer(serializers.ModelSerializer):
    """Serializer for Content model."""
    entities = EntityListField(required=False)
    faq_section = serializers.ListField(child=FAQItemSerializer(), required=False)
    target_keyword = serializers.CharField(source='project.target_keyword', read_only=True)

    class Meta:
        model = Content
        fields = (
            'id', 'project', 'target_keyword', 'title', 'meta_description', 'body',
            'faq_section', 'seo_score', 'entities', 'word_count', 'status',
            'created_at', 'updated_at'
        )
        read_only_fields = ('id', 'seo_score', 'word_count', 'created_at', 'updated_at')

    def validate_project(self, value):
        """Content can only be attached to the requesting user's projects."""
        request = self.context.get('request')
        if request is not None and value.user_id != request.user.id:
            raise serializers.ValidationError("Project not found.")
        return value

    def update(self, instance, validated_data):
        # Content does not move between projects
        validated_data.pop('project', None)
        return super().update(instance, validated_data)


class ContentListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for content lists."""

    class Meta:
        model = Content
        fields = (
            'id', 'project', 'title', 'seo_score', 'word_count', 'status',
            'created_at', 'updated_at'
        )


class ScoreRequestSerializer(serializers.Serializer):
    """Body for POST /api/v1/seo/score/."""
    title = serializers.CharField(required=False, allow_blank=True, default='')
    meta_description = serializers.CharField(required=False, allow_blank=True, default='')
    content = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=False)
    target_keyword = serializers.CharField(required=False, allow_blank=True, default='')
    entities = EntityListField(required=False, default=list)


class GenerateRequestSerializer(serializers.Serializer):
    """Body for POST /api/v1/seo/generate/."""
    target_keyword = serializers.CharField(max_length=255)
    business_type = serializers.CharField(max_length=100)
    location = serializers.CharField(required=False, allow_blank=True, default='')
    tone_of_voice = serializers.CharField(required=False, default='Professional')
    entities = EntityListField(required=False, default=list)


class KeywordDensityRequestSerializer(serializers.Serializer):
    """Body for POST /api/v1/seo/keyword-density/."""
    text = serializers.CharField(allow_blank=True, trim_whitespace=False)
    top_n = serializers.IntegerField(required=False, min_value=1, max_value=200, default=DEFAULT_TOP_N)


class SerpRequestSerializer(serializers.Serializer):
    """Body for POST /api/v1/seo/serp/."""
    keyword = serializers.CharField(max_length=255)
    url = serializers.CharField(required=False, allow_blank=True, default='')
