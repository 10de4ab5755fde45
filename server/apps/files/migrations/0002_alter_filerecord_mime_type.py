from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('files', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='filerecord',
            name='mime_type',
            field=models.CharField(blank=True, default='', help_text='MIME type reported by the uploader', max_length=255),
        ),
    ]
