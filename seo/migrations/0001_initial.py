# Generated migration for the Content model

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Content',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=500)),
                ('meta_description', models.TextField(blank=True)),
                ('body', models.TextField(blank=True)),
                ('faq_section', models.JSONField(blank=True, default=list, help_text='List of {question, answer} pairs')),
                ('seo_score', models.IntegerField(default=0)),
                ('entities', models.JSONField(blank=True, default=list, help_text='Entity names the content was generated with')),
                ('word_count', models.IntegerField(default=0)),
                ('status', models.CharField(choices=[('Draft', 'Draft'), ('Published', 'Published')], default='Draft', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contents', to='projects.project')),
            ],
            options={
                'db_table': 'content',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['project', 'status'], name='content_project_status_idx')],
            },
        ),
    ]
