"""
Contact Services Tests
======================

Run tests:
    docker compose exec web python manage.py test apps.contacts.tests.test_services --settings=config.test_settings
"""

from django.test import TestCase
from django.utils import timezone

from apps.contacts import services
from apps.contacts.models import Contact
from apps.contacts.patch import ContactPatch
from apps.core.exceptions import NotFoundError
from apps.core.models import Organization


class ContactWriteTest(TestCase):
    """Writes go through live rows only"""

    def setUp(self):
        self.organization = Organization.objects.create(name='Acme Sales')
        self.contact = Contact.objects.create(
            organization=self.organization,
            name='Ana',
            email='ana@ex.com',
            notes='VIP'
        )

    def test_write_does_not_revive_soft_deleted_contact(self):
        stale = Contact.objects.get(pk=self.contact.pk)
        Contact.objects.filter(pk=self.contact.pk).update(deleted_at=timezone.now())

        stale.name = 'Ana Silva'
        stale.updated_at = timezone.now()
        with self.assertRaises(NotFoundError):
            services._save(stale, ['name'])

        self.contact.refresh_from_db()
        self.assertIsNotNone(self.contact.deleted_at)
        self.assertEqual(self.contact.name, 'Ana')

    def test_write_touches_only_changed_columns(self):
        stale = Contact.objects.get(pk=self.contact.pk)
        Contact.objects.filter(pk=self.contact.pk).update(notes='Changed elsewhere')

        stale.role = 'CFO'
        stale.updated_at = timezone.now()
        contact = services._save(stale, ['role'])

        self.assertEqual(contact.role, 'CFO')
        self.assertEqual(contact.notes, 'Changed elsewhere')

    def test_update_soft_deleted_contact(self):
        self.contact.soft_delete()

        with self.assertRaises(NotFoundError):
            services.update_contact(self.organization, str(self.contact.pk), ContactPatch.from_payload({'role': 'CFO'}))
