import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Organization',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Organization (tenant) name', max_length=200, unique=True)),
                ('slug', models.SlugField(help_text='URL-friendly name (auto-generated)', max_length=200, unique=True)),
                ('is_active', models.BooleanField(default=True, help_text='Inactive organizations are refused by the public API')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Organization',
                'verbose_name_plural': 'Organizations',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['is_active'], name='core_org_is_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='ApiKey',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, help_text='Label to recognise the key (e.g. "Zapier")', max_length=100, verbose_name='Name')),
                ('prefix', models.CharField(editable=False, help_text='First characters of the key, for identification', max_length=20, verbose_name='Prefix')),
                ('key_hash', models.CharField(editable=False, max_length=64, unique=True, verbose_name='Key hash')),
                ('is_active', models.BooleanField(default=True, help_text='Revoked keys are rejected', verbose_name='Is Active')),
                ('last_used_at', models.DateTimeField(blank=True, null=True, verbose_name='Last Used At')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('organization', models.ForeignKey(help_text='Organization this key resolves to', on_delete=django.db.models.deletion.CASCADE, related_name='api_keys', to='core.organization', verbose_name='Organization')),
            ],
            options={
                'verbose_name': 'API Key',
                'verbose_name_plural': 'API Keys',
                'ordering': ['-created_at'],
            },
        ),
    ]
