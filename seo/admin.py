from django.contrib import admin
from .models import Content


@admin.register(Content)
class ContentAdmin(admin.ModelAdmin):
    list_display = ('title', 'project', 'status', 'seo_score', 'word_count', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('title', 'project__target_keyword', 'project__user__email')
    readonly_fields = ('seo_score', 'word_count', 'created_at', 'updated_at')
