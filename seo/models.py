"""
SEO content models.
"""
from django.db import models
from projects.models import Project

from .content_scoring import score_content
from .text_utils import word_count


class Content(models.Model):
    """
    A generated or hand-written article for a project.
    word_count is derived from body on every save.
    """
    STATUS_CHOICES = [
        ('Draft', 'Draft'),
        ('Published', 'Published'),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='contents')
    title = models.CharField(max_length=500)
    meta_description = models.TextField(blank=True)
    body = models.TextField(blank=True)
    faq_section = models.JSONField(
        default=list,
        blank=True,
        help_text="List of {question, answer} pairs"
    )
    seo_score = models.IntegerField(default=0)
    entities = models.JSONField(
        default=list,
        blank=True,
        help_text="Entity names the content was generated with"
    )
    word_count = models.IntegerField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Draft')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'content'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'status'], name='content_project_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.project.target_keyword})"

    def save(self, *args, **kwargs):
        self.word_count = word_count(self.body)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'body' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'word_count'}
        super().save(*args, **kwargs)

    def analyze(self):
        """Run the SEO scoring heuristic over this content."""
        return score_content(
            title=self.title,
            meta_description=self.meta_description,
            content=self.body,
            target_keyword=self.project.target_keyword,
            entities=self.entities or [],
        )

    def rescore(self, save=True):
        """Recompute seo_score; returns the full analysis."""
        result = self.analyze()
        self.seo_score = result['score']
        if save and self.pk:
            self.save(update_fields=['seo_score', 'updated_at'])
        return result
