import hashlib
import secrets

from django.db import models
from django.utils import timezone
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _


class Organization(models.Model):

    # Basic Information
    name = models.CharField(max_length=200,unique=True,help_text="Organization (tenant) name")
    slug = models.SlugField(max_length=200,unique=True,help_text="URL-friendly name (auto-generated)")

    # Status
    is_active = models.BooleanField(default=True,help_text="Inactive organizations are refused by the public API")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Organization"
        verbose_name_plural = "Organizations"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active'], name='core_org_is_active_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):

        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def get_active_api_keys_count(self):

        return self.api_keys.filter(is_active=True).count()


def hash_api_key(raw_key):
    """SHA-256 hex digest of a raw API key (the only form that is stored)"""
    return hashlib.sha256(raw_key.encode('utf-8')).hexdigest()


class ApiKeyManager(models.Manager):

    def issue(self, organization, name=''):
        """
        Create a new key for an organization.

        Returns (api_key, raw_key). The raw key is not stored anywhere,
        so it has to be handed to the caller right away.
        """
        api_key = self.model(organization=organization, name=name)
        raw_key = api_key.assign_new_key()
        api_key.save()
        return api_key, raw_key

    def get_by_raw_key(self, raw_key):
        return self.select_related('organization').get(
            key_hash=hash_api_key(raw_key),
            is_active=True,
        )


class ApiKey(models.Model):

    KEY_PREFIX = 'crm_'
    DISPLAY_PREFIX_LENGTH = 12

    organization = models.ForeignKey(Organization,on_delete=models.CASCADE,related_name='api_keys',verbose_name=_('Organization'),help_text=_('Organization this key resolves to'))

    name = models.CharField(max_length=100,blank=True,verbose_name=_('Name'),help_text=_('Label to recognise the key (e.g. "Zapier")'))
    prefix = models.CharField(max_length=20,editable=False,verbose_name=_('Prefix'),help_text=_('First characters of the key, for identification'))
    key_hash = models.CharField(max_length=64,unique=True,editable=False,verbose_name=_('Key hash'))

    is_active = models.BooleanField(default=True,verbose_name=_('Is Active'),help_text=_('Revoked keys are rejected'))
    last_used_at = models.DateTimeField(null=True,blank=True,verbose_name=_('Last Used At'))
    created_at = models.DateTimeField(auto_now_add=True,verbose_name=_('Created At'))

    objects = ApiKeyManager()

    class Meta:
        verbose_name = _('API Key')
        verbose_name_plural = _('API Keys')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.prefix}… ({self.organization.name})"

    def assign_new_key(self):
        """Generate a raw key, keep only its prefix and hash, return the raw key"""
        raw_key = f"{self.KEY_PREFIX}{secrets.token_urlsafe(32)}"
        self.prefix = raw_key[:self.DISPLAY_PREFIX_LENGTH]
        self.key_hash = hash_api_key(raw_key)
        return raw_key

    def touch(self):
        """Record usage without going through save() (no full-row write)"""
        self.last_used_at = timezone.now()
        ApiKey.objects.filter(pk=self.pk).update(last_used_at=self.last_used_at)
