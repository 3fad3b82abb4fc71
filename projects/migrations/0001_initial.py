# Generated migration for the Project model

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, max_length=255)),
                ('target_keyword', models.CharField(help_text='Primary keyword the project targets', max_length=255)),
                ('business_type', models.CharField(choices=[('E-commerce', 'E-commerce'), ('SaaS', 'SaaS'), ('Agency', 'Marketing Agency'), ('Blog', 'Blog/Content Site'), ('Local Business', 'Local Business'), ('Enterprise', 'Enterprise'), ('Other', 'Other')], max_length=50)),
                ('website_url', models.URLField(blank=True, help_text='Website the project is for')),
                ('location', models.CharField(blank=True, max_length=255)),
                ('language', models.CharField(choices=[('English', 'English'), ('Spanish', 'Spanish'), ('French', 'French'), ('German', 'German'), ('Portuguese', 'Portuguese'), ('Italian', 'Italian')], default='English', max_length=50)),
                ('tone_of_voice', models.CharField(choices=[('Professional', 'Professional'), ('Friendly', 'Friendly'), ('Authority', 'Authority'), ('Conversational', 'Conversational'), ('Technical', 'Technical'), ('Creative', 'Creative')], default='Professional', max_length=50)),
                ('additional_info', models.TextField(blank=True, help_text='Free-text notes from the wizard')),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Paused', 'Paused'), ('Completed', 'Completed')], default='Active', max_length=20)),
                ('seo_score', models.IntegerField(default=0)),
                ('content_count', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'projects',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'status'], name='projects_user_status_idx')],
            },
        ),
    ]
