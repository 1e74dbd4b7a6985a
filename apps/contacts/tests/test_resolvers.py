"""
Dedup & Company Resolver Tests
==============================

Run tests:
    docker compose exec web python manage.py test apps.contacts.tests.test_resolvers --settings=config.test_settings
"""

import uuid

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from apps.contacts.models import ClientCompany, Contact
from apps.contacts.resolvers import find_duplicate_contact, resolve_client_company, resolve_company_id
from apps.core.exceptions import ValidationError
from apps.core.models import Organization


class ResolveCompanyTest(TestCase):

    def setUp(self):
        self.organization = Organization.objects.create(name='Acme Sales')
        self.other_organization = Organization.objects.create(name='Other Sales')

    def test_creates_once_case_insensitive(self):
        first = resolve_company_id(self.organization, 'Acme Corp')
        second = resolve_company_id(self.organization, '  ACME corp ')

        self.assertEqual(first, second)
        self.assertEqual(ClientCompany.objects.filter(organization=self.organization).count(), 1)
        self.assertEqual(ClientCompany.objects.get(pk=first).name, 'Acme Corp')

    def test_scoped_per_organization(self):
        first = resolve_company_id(self.organization, 'Acme Corp')
        other = resolve_company_id(self.other_organization, 'Acme Corp')
        self.assertNotEqual(first, other)

    def test_empty_name(self):
        self.assertIsNone(resolve_company_id(self.organization, '   '))
        self.assertIsNone(resolve_company_id(self.organization, None))
        self.assertEqual(ClientCompany.objects.count(), 0)

    def test_soft_deleted_company_is_not_reused(self):
        first = resolve_company_id(self.organization, 'Acme Corp')
        ClientCompany.objects.filter(pk=first).update(deleted_at=timezone.now())

        second = resolve_company_id(self.organization, 'acme corp')
        self.assertNotEqual(first, second)

    def test_database_rejects_duplicate_names(self):
        ClientCompany.objects.create(organization=self.organization, name='Acme Corp')

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                ClientCompany.objects.create(organization=self.organization, name='ACME CORP')

    def test_resolve_client_company(self):
        company_id = resolve_company_id(self.organization, 'Acme Corp')
        self.assertEqual(resolve_client_company(self.organization, company_id), company_id)

    def test_resolve_client_company_other_tenant(self):
        company_id = resolve_company_id(self.other_organization, 'Acme Corp')

        with self.assertRaises(ValidationError):
            resolve_client_company(self.organization, company_id)

        with self.assertRaises(ValidationError):
            resolve_client_company(self.organization, uuid.uuid4())


class FindDuplicateContactTest(TestCase):

    def setUp(self):
        self.organization = Organization.objects.create(name='Acme Sales')
        self.ana = Contact.objects.create(
            organization=self.organization,
            name='Ana',
            email='ana@ex.com',
            phone='+5511987654321'
        )

    def test_match_by_email(self):
        self.assertEqual(find_duplicate_contact(self.organization, email='ana@ex.com'), self.ana)

    def test_match_by_phone(self):
        self.assertEqual(find_duplicate_contact(self.organization, phone='+5511987654321'), self.ana)

    def test_match_by_both(self):
        found = find_duplicate_contact(self.organization, email='ana@ex.com', phone='+5511987654321')
        self.assertEqual(found, self.ana)

    def test_no_match(self):
        self.assertIsNone(find_duplicate_contact(self.organization, email='bob@ex.com'))
        self.assertIsNone(find_duplicate_contact(self.organization))

    def test_other_organization(self):
        other = Organization.objects.create(name='Other Sales')
        self.assertIsNone(find_duplicate_contact(other, email='ana@ex.com'))

    def test_soft_deleted_ignored(self):
        self.ana.soft_delete()
        self.assertIsNone(find_duplicate_contact(self.organization, email='ana@ex.com'))

    def test_email_and_phone_on_different_contacts(self):
        Contact.objects.create(organization=self.organization, name='Bob', email='bob@ex.com')

        with self.assertRaises(ValidationError):
            find_duplicate_contact(self.organization, email='bob@ex.com', phone='+5511987654321')
