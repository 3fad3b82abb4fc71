"""
Project model.
"""
from django.db import models
from django.db.models import F
from django.conf import settings


class Project(models.Model):
    """
    An SEO project built around one target keyword.
    One user can have multiple projects; created in one step from the wizard payload.
    """
    BUSINESS_TYPE_CHOICES = [
        ('E-commerce', 'E-commerce'),
        ('SaaS', 'SaaS'),
        ('Agency', 'Marketing Agency'),
        ('Blog', 'Blog/Content Site'),
        ('Local Business', 'Local Business'),
        ('Enterprise', 'Enterprise'),
        ('Other', 'Other'),
    ]
    LANGUAGE_CHOICES = [
        ('English', 'English'),
        ('Spanish', 'Spanish'),
        ('French', 'French'),
        ('German', 'German'),
        ('Portuguese', 'Portuguese'),
        ('Italian', 'Italian'),
    ]
    TONE_CHOICES = [
        ('Professional', 'Professional'),
        ('Friendly', 'Friendly'),
        ('Authority', 'Authority'),
        ('Conversational', 'Conversational'),
        ('Technical', 'Technical'),
        ('Creative', 'Creative'),
    ]
    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Paused', 'Paused'),
        ('Completed', 'Completed'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects'
    )
    name = models.CharField(max_length=255, blank=True)
    target_keyword = models.CharField(max_length=255, help_text="Primary keyword the project targets")
    business_type = models.CharField(max_length=50, choices=BUSINESS_TYPE_CHOICES)
    website_url = models.URLField(blank=True, help_text="Website the project is for")
    location = models.CharField(max_length=255, blank=True)
    language = models.CharField(max_length=50, choices=LANGUAGE_CHOICES, default='English')
    tone_of_voice = models.CharField(max_length=50, choices=TONE_CHOICES, default='Professional')
    additional_info = models.TextField(blank=True, help_text="Free-text notes from the wizard")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Active')
    seo_score = models.IntegerField(default=0)
    content_count = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='projects_user_status_idx'),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.business_type})"

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self.target_keyword
        super().save(*args, **kwargs)

    @property
    def display_name(self):
        return self.name or self.target_keyword

    def update_seo_score(self, score):
        """Store a new 0-100 score."""
        self.seo_score = max(0, min(100, int(score)))
        self.save(update_fields=['seo_score', 'updated_at'])

    def record_content(self, score=None):
        """Count a newly saved piece of content, optionally taking its score."""
        Project.objects.filter(pk=self.pk).update(content_count=F('content_count') + 1)
        self.refresh_from_db(fields=['content_count'])
        if score is not None:
            self.update_seo_score(score)
