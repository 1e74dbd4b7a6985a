"""
Public API Authentication Tests
===============================

Test Coverage:
1. ApiKey issuing (hash + prefix only, raw key returned once)
2. authenticate_public_api failures (missing, invalid, revoked, inactive org, disabled)
3. public_api_view: header variants and tenant injection

Run tests:
    docker compose exec web python manage.py test apps.core.tests.test_auth --settings=config.test_settings
"""

from unittest.mock import patch

from django.test import TestCase, Client, RequestFactory
from django.urls import reverse

from apps.core.auth import authenticate_public_api, get_raw_api_key
from apps.core.conf import PublicApiConfig
from apps.core.models import ApiKey, Organization, hash_api_key


class ApiKeyModelTest(TestCase):
    """Test ApiKey issuing and lookup"""

    def setUp(self):
        self.organization = Organization.objects.create(name='Acme Sales')

    def test_organization_slug_generated(self):
        self.assertEqual(self.organization.slug, 'acme-sales')

    def test_issue_stores_hash_not_raw_key(self):
        api_key, raw_key = ApiKey.objects.issue(self.organization, name='Zapier')

        self.assertTrue(raw_key.startswith(ApiKey.KEY_PREFIX))
        self.assertEqual(api_key.key_hash, hash_api_key(raw_key))
        self.assertNotEqual(api_key.key_hash, raw_key)
        self.assertEqual(api_key.prefix, raw_key[:ApiKey.DISPLAY_PREFIX_LENGTH])

    def test_issue_generates_unique_keys(self):
        _, first = ApiKey.objects.issue(self.organization)
        _, second = ApiKey.objects.issue(self.organization)
        self.assertNotEqual(first, second)

    def test_get_by_raw_key(self):
        api_key, raw_key = ApiKey.objects.issue(self.organization)

        found = ApiKey.objects.get_by_raw_key(raw_key)
        self.assertEqual(found.pk, api_key.pk)
        self.assertEqual(found.organization, self.organization)

    def test_get_by_raw_key_ignores_revoked(self):
        api_key, raw_key = ApiKey.objects.issue(self.organization)
        api_key.is_active = False
        api_key.save()

        with self.assertRaises(ApiKey.DoesNotExist):
            ApiKey.objects.get_by_raw_key(raw_key)

    def test_active_api_keys_count(self):
        ApiKey.objects.issue(self.organization)
        revoked, _ = ApiKey.objects.issue(self.organization)
        revoked.is_active = False
        revoked.save()

        self.assertEqual(self.organization.get_active_api_keys_count(), 1)


class AuthenticatePublicApiTest(TestCase):
    """Test authenticate_public_api outcomes"""

    def setUp(self):
        self.factory = RequestFactory()
        self.config = PublicApiConfig()
        self.organization = Organization.objects.create(name='Acme Sales')
        self.api_key, self.raw_key = ApiKey.objects.issue(self.organization)

    def test_missing_key(self):
        request = self.factory.get('/api/public/v1/contacts')
        auth = authenticate_public_api(request, self.config)

        self.assertFalse(auth.ok)
        self.assertEqual(auth.status, 401)
        self.assertEqual(auth.body['code'], 'AUTH_MISSING')

    def test_invalid_key(self):
        request = self.factory.get('/api/public/v1/contacts', HTTP_X_API_KEY='crm_nope')
        auth = authenticate_public_api(request, self.config)

        self.assertFalse(auth.ok)
        self.assertEqual(auth.status, 401)
        self.assertEqual(auth.body, {'error': 'Invalid API key', 'code': 'AUTH_INVALID'})

    def test_inactive_organization(self):
        self.organization.is_active = False
        self.organization.save()

        request = self.factory.get('/api/public/v1/contacts', HTTP_X_API_KEY=self.raw_key)
        auth = authenticate_public_api(request, self.config)

        self.assertFalse(auth.ok)
        self.assertEqual(auth.status, 403)
        self.assertEqual(auth.body['code'], 'ORG_INACTIVE')

    def test_disabled(self):
        request = self.factory.get('/api/public/v1/contacts', HTTP_X_API_KEY=self.raw_key)
        auth = authenticate_public_api(request, PublicApiConfig(enabled=False))

        self.assertFalse(auth.ok)
        self.assertEqual(auth.status, 503)
        self.assertEqual(auth.body['code'], 'API_DISABLED')

    def test_success_records_usage(self):
        self.assertIsNone(self.api_key.last_used_at)

        request = self.factory.get('/api/public/v1/contacts', HTTP_X_API_KEY=self.raw_key)
        auth = authenticate_public_api(request, self.config)

        self.assertTrue(auth.ok)
        self.assertEqual(auth.organization, self.organization)
        self.api_key.refresh_from_db()
        self.assertIsNotNone(self.api_key.last_used_at)

    def test_bearer_fallback(self):
        request = self.factory.get(
            '/api/public/v1/contacts',
            HTTP_AUTHORIZATION=f'Bearer {self.raw_key}'
        )
        self.assertEqual(get_raw_api_key(request, self.config), self.raw_key)

    def test_custom_header(self):
        config = PublicApiConfig(key_header='X-Crm-Token')
        request = self.factory.get('/api/public/v1/contacts', HTTP_X_CRM_TOKEN=self.raw_key)
        self.assertEqual(get_raw_api_key(request, config), self.raw_key)


class PublicApiConfigTest(TestCase):
    """Test limit validation in PublicApiConfig"""

    def test_defaults(self):
        config = PublicApiConfig()
        self.assertEqual((config.min_limit, config.default_limit, config.max_limit), (1, 50, 100))

    def test_default_outside_range(self):
        from django.core.exceptions import ImproperlyConfigured

        with self.assertRaises(ImproperlyConfigured):
            PublicApiConfig(default_limit=500)

        with self.assertRaises(ImproperlyConfigured):
            PublicApiConfig(min_limit=0)


class PublicApiViewAuthTest(TestCase):
    """Test auth failures through a real route"""

    def setUp(self):
        self.client = Client()
        self.url = reverse('contacts:contact_collection')
        self.organization = Organization.objects.create(name='Acme Sales')
        self.api_key, self.raw_key = ApiKey.objects.issue(self.organization)

    def test_no_key_returns_401(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['code'], 'AUTH_MISSING')

    def test_wrong_key_returns_401(self):
        response = self.client.get(self.url, HTTP_X_API_KEY='crm_wrong')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['code'], 'AUTH_INVALID')

    def test_valid_key_returns_200(self):
        response = self.client.get(self.url, HTTP_X_API_KEY=self.raw_key)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'data': [], 'nextCursor': None})

    def test_bearer_key_returns_200(self):
        response = self.client.get(self.url, HTTP_AUTHORIZATION=f'Bearer {self.raw_key}')
        self.assertEqual(response.status_code, 200)

    def test_disabled_returns_503(self):
        with patch('apps.core.decorators.get_public_api_config', return_value=PublicApiConfig(enabled=False)):
            response = self.client.get(self.url, HTTP_X_API_KEY=self.raw_key)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['code'], 'API_DISABLED')

    def test_auth_checked_before_payload(self):
        response = self.client.post(self.url, data='not json', content_type='application/json')
        self.assertEqual(response.status_code, 401)

    def test_method_not_allowed(self):
        response = self.client.delete(self.url, HTTP_X_API_KEY=self.raw_key)
        self.assertEqual(response.status_code, 405)
