from django.contrib import admin
from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('display_name', 'target_keyword', 'business_type', 'user', 'status', 'seo_score', 'content_count', 'created_at')
    list_filter = ('status', 'business_type', 'created_at')
    search_fields = ('name', 'target_keyword', 'user__email')
    readonly_fields = ('seo_score', 'content_count', 'created_at', 'updated_at')
