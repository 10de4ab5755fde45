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
            name='FileRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Human-readable file name', max_length=255)),
                ('size_bytes', models.BigIntegerField(help_text='Caller-reported size in bytes')),
                ('mime_type', models.CharField(help_text='MIME type reported by the uploader', max_length=255)),
                ('blob_ref', models.CharField(help_text='Opaque blob store reference', max_length=1024, unique=True)),
                ('is_public', models.BooleanField(db_index=True, default=False, help_text='Listed for every caller when true')),
                ('tags', models.JSONField(blank=True, default=list, help_text='Free-form tags, distinct strings')),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('uploaded_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['uploaded_by', '-created_at'], name='files_owner_recent_idx'),
                    models.Index(fields=['is_public', '-created_at'], name='files_public_recent_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('size_bytes__gte', 0)), name='files_size_bytes_non_negative'),
                ],
            },
        ),
    ]
