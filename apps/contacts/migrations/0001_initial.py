import uuid

import django.db.models.deletion
import django.db.models.functions.text
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ClientCompany',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Company name (unique per organization, case-insensitive)', max_length=255)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('deleted_at', models.DateTimeField(blank=True, help_text='Soft delete marker', null=True)),
                ('organization', models.ForeignKey(help_text='Organization (tenant) that owns this company', on_delete=django.db.models.deletion.CASCADE, related_name='client_companies', to='core.organization')),
            ],
            options={
                'verbose_name': 'Client Company',
                'verbose_name_plural': 'Client Companies',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Contact',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text="Contact's full name", max_length=255)),
                ('email', models.CharField(blank=True, help_text='Lower-cased email address', max_length=320, null=True)),
                ('phone', models.CharField(blank=True, help_text='Canonical phone number (E.164 when parseable)', max_length=32, null=True)),
                ('role', models.CharField(blank=True, max_length=255, null=True)),
                ('company_name', models.CharField(blank=True, help_text='Free-text company name as sent by the caller', max_length=255, null=True)),
                ('avatar', models.TextField(blank=True, null=True)),
                ('status', models.CharField(blank=True, max_length=50, null=True)),
                ('stage', models.CharField(blank=True, max_length=50, null=True)),
                ('source', models.CharField(blank=True, max_length=100, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('last_interaction', models.DateTimeField(blank=True, null=True)),
                ('last_purchase_date', models.DateField(blank=True, null=True)),
                ('total_value', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('deleted_at', models.DateTimeField(blank=True, help_text='Soft delete marker', null=True)),
                ('client_company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='contacts', to='contacts.clientcompany')),
                ('organization', models.ForeignKey(help_text='Organization (tenant) that owns this contact', on_delete=django.db.models.deletion.CASCADE, related_name='contacts', to='core.organization')),
            ],
            options={
                'verbose_name': 'Contact',
                'verbose_name_plural': 'Contacts',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.AddConstraint(
            model_name='clientcompany',
            constraint=models.UniqueConstraint(django.db.models.functions.text.Lower('name'), 'organization', condition=models.Q(('deleted_at__isnull', True)), name='uq_client_company_org_lower_name'),
        ),
        migrations.AddIndex(
            model_name='contact',
            index=models.Index(fields=['organization', 'created_at'], name='contact_org_created_idx'),
        ),
        migrations.AddConstraint(
            model_name='contact',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True), ('email__isnull', False)), fields=('organization', 'email'), name='uq_contact_org_email_alive'),
        ),
        migrations.AddConstraint(
            model_name='contact',
            constraint=models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True), ('phone__isnull', False)), fields=('organization', 'phone'), name='uq_contact_org_phone_alive'),
        ),
    ]
