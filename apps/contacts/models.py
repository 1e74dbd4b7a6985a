import uuid

from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from django.utils import timezone

from apps.core.models import Organization


class TenantQuerySet(models.QuerySet):
    """
    Shared scoping for tenant-owned, soft-deletable records

    Every public API read and write starts from
    Model.objects.alive().for_organization(organization)
    """

    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def for_organization(self, organization):
        return self.filter(organization=organization)


class ClientCompany(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='client_companies', help_text='Organization (tenant) that owns this company')
    name = models.CharField(max_length=255, help_text='Company name (unique per organization, case-insensitive)')

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)
    deleted_at = models.DateTimeField(null=True, blank=True, help_text='Soft delete marker')

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = 'Client Company'
        verbose_name_plural = 'Client Companies'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                Lower('name'),
                'organization',
                condition=Q(deleted_at__isnull=True),
                name='uq_client_company_org_lower_name',
            ),
        ]

    def __str__(self):
        return self.name


class Contact(models.Model):

    DEFAULT_STATUS = 'ACTIVE'
    DEFAULT_STAGE = 'LEAD'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='contacts', help_text='Organization (tenant) that owns this contact')

    # Identification (email/phone form the dedup key)
    name = models.CharField(max_length=255, help_text="Contact's full name")
    email = models.CharField(max_length=320, null=True, blank=True, help_text='Lower-cased email address')
    phone = models.CharField(max_length=32, null=True, blank=True, help_text='Canonical phone number (E.164 when parseable)')

    # Relationship
    role = models.CharField(max_length=255, null=True, blank=True)
    company_name = models.CharField(max_length=255, null=True, blank=True, help_text='Free-text company name as sent by the caller')
    client_company = models.ForeignKey(ClientCompany, on_delete=models.SET_NULL, null=True, blank=True, related_name='contacts')
    avatar = models.TextField(null=True, blank=True)

    # Lifecycle
    status = models.CharField(max_length=50, null=True, blank=True)
    stage = models.CharField(max_length=50, null=True, blank=True)
    source = models.CharField(max_length=100, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    # Temporal
    birth_date = models.DateField(null=True, blank=True)
    last_interaction = models.DateTimeField(null=True, blank=True)
    last_purchase_date = models.DateField(null=True, blank=True)
    total_value = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)
    deleted_at = models.DateTimeField(null=True, blank=True, help_text='Soft delete marker')

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'email'],
                condition=Q(deleted_at__isnull=True, email__isnull=False),
                name='uq_contact_org_email_alive',
            ),
            models.UniqueConstraint(
                fields=['organization', 'phone'],
                condition=Q(deleted_at__isnull=True, phone__isnull=False),
                name='uq_contact_org_phone_alive',
            ),
        ]
        indexes = [
            models.Index(fields=['organization', 'created_at'], name='contact_org_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.email or self.phone or '-'})"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])

    def restore(self):
        self.deleted_at = None
        self.save(update_fields=['deleted_at'])

    def to_dict(self):
        """Public API representation"""
        return {
            'id': str(self.id),
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'company_name': self.company_name,
            'client_company_id': str(self.client_company_id) if self.client_company_id else None,
            'avatar': self.avatar,
            'status': self.status,
            'stage': self.stage,
            'source': self.source,
            'notes': self.notes,
            'birth_date': self.birth_date.isoformat() if self.birth_date else None,
            'last_interaction': self.last_interaction.isoformat() if self.last_interaction else None,
            'last_purchase_date': self.last_purchase_date.isoformat() if self.last_purchase_date else None,
            'total_value': float(self.total_value) if self.total_value is not None else None,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }
