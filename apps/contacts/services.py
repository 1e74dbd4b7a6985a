"""
Contacts business logic used by the public API views.

Each function works inside one organization and returns model
instances; errors are raised as apps.core.exceptions.PublicApiError
subclasses and turned into JSON by the view decorator.

There is no request-wide transaction: a company created while
resolving company_name stays even if the contact write then fails.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.core.exceptions import NotFoundError, ValidationError, store_errors

from .cursor import decode_cursor, page_window, parse_limit
from .models import Contact
from .normalize import normalize_email, normalize_phone, normalize_text, sanitize_uuid
from .patch import UNSET
from .resolvers import find_duplicate_contact, resolve_client_company, resolve_company_id

logger = logging.getLogger(__name__)


def contacts_for(organization):
    return Contact.objects.alive().for_organization(organization).order_by('-created_at', '-id')


# LIST / FETCH

def list_contacts(organization, params, config):
    """
    One page of contacts, newest first.

    params: q, email, phone, client_company_id, limit, cursor
    Returns (contacts, next_cursor).
    """
    q = normalize_text(params.get('q'))
    email = normalize_email(params.get('email'))
    phone = normalize_phone(params.get('phone'), region=config.phone_region)
    client_company_id = sanitize_uuid(params.get('client_company_id'))
    limit = parse_limit(params.get('limit'), config)
    offset = decode_cursor(params.get('cursor'))

    contacts = contacts_for(organization)

    if client_company_id:
        contacts = contacts.filter(client_company_id=client_company_id)
    if email:
        contacts = contacts.filter(email=email)
    if phone:
        contacts = contacts.filter(phone=phone)
    if q:
        # Search in name, email, or phone using Q objects (OR condition)
        contacts = contacts.filter(
            Q(name__icontains=q) |
            Q(email__icontains=q) |
            Q(phone__icontains=q)
        )

    with store_errors():
        total = contacts.count()
        start, end, next_cursor = page_window(offset, limit, total)
        page = list(contacts[start:end + 1])

    return page, next_cursor


def get_contact(organization, contact_id):
    contact_id = sanitize_uuid(contact_id)
    if contact_id is None:
        raise ValidationError('Invalid contact id')

    with store_errors():
        try:
            return contacts_for(organization).get(pk=contact_id)
        except Contact.DoesNotExist:
            raise NotFoundError('Contact not found')


# WRITES

def _resolve_company_reference(organization, patch):
    """
    client_company_id to store for this request, or UNSET to leave it.

    A direct id wins over a name; a name may create the company.
    """
    if patch.is_set('client_company_id'):
        if patch.client_company_id is None:
            return None
        return resolve_client_company(organization, patch.client_company_id)

    company_name = patch.value('company_name')
    if company_name:
        return resolve_company_id(organization, company_name)
    return UNSET


def _save(contact, changed):
    """
    Write only the changed columns, and only while the contact is live.

    A contact soft-deleted since it was read stays deleted and the
    request gets a NotFoundError.
    """
    values = {name: getattr(contact, name) for name in changed}
    values['updated_at'] = contact.updated_at

    with store_errors():
        with transaction.atomic():
            updated = Contact.objects.alive().filter(pk=contact.pk).update(**values)
        if not updated:
            raise NotFoundError('Contact not found')
        contact.refresh_from_db()
    return contact


def _update_from_upsert(contact, patch, client_company_id):
    # Upsert only fills in what was sent; clearing a field is PATCH's job
    exclude = {'client_company_id'}
    exclude.update(name for name in patch.present_fields() if patch.value(name) is None)
    changed = patch.apply_to(contact, exclude=exclude)

    if client_company_id is not UNSET:
        contact.client_company_id = client_company_id
        changed.append('client_company_id')
    contact.updated_at = timezone.now()
    return _save(contact, changed)


def upsert_contact(organization, patch):
    """
    Create a contact, or update the one that already has this email/phone.

    Returns (contact, created).
    """
    email = patch.value('email')
    phone = patch.value('phone')
    if not email and not phone:
        raise ValidationError('Provide email or phone')

    if patch.value('client_company_id'):
        resolve_client_company(organization, patch.client_company_id)

    existing = find_duplicate_contact(organization, email=email, phone=phone)

    name = patch.value('name')
    if existing is None and not name:
        raise ValidationError('Name is required to create a new contact')

    client_company_id = _resolve_company_reference(organization, patch)

    if existing is not None:
        contact = _update_from_upsert(existing, patch, client_company_id)
        logger.info(f"Contact updated via upsert: {contact.pk} (organization {organization.pk})")
        return contact, False

    now = timezone.now()
    contact = Contact(organization=organization, created_at=now, updated_at=now)
    patch.apply_to(contact, exclude={'client_company_id'})
    contact.status = contact.status or Contact.DEFAULT_STATUS
    contact.stage = contact.stage or Contact.DEFAULT_STAGE
    if client_company_id is not UNSET:
        contact.client_company_id = client_company_id

    with store_errors():
        try:
            with transaction.atomic():
                contact.save(force_insert=True)
        except IntegrityError:
            # A concurrent request inserted the same email/phone first
            existing = find_duplicate_contact(organization, email=email, phone=phone)
            if existing is None:
                raise
            contact = _update_from_upsert(existing, patch, client_company_id)
            logger.info(f"Contact updated after insert conflict: {contact.pk} (organization {organization.pk})")
            return contact, False
        contact.refresh_from_db()
    logger.info(f"Contact created: {contact.pk} - {contact.name} (organization {organization.pk})")
    return contact, True


def update_contact(organization, contact_id, patch):
    """
    Apply only the fields present in the patch to one contact.

    Raises ValidationError / NotFoundError; returns the updated contact.
    """
    if patch.is_set('name') and not patch.name:
        raise ValidationError('name cannot be empty')

    contact = get_contact(organization, contact_id)

    email = patch.value('email', contact.email)
    phone = patch.value('phone', contact.phone)
    if not email and not phone:
        raise ValidationError('Contact must keep an email or phone')

    client_company_id = _resolve_company_reference(organization, patch)

    changed = patch.apply_to(contact, exclude={'client_company_id'})
    if client_company_id is not UNSET:
        contact.client_company_id = client_company_id
        changed.append('client_company_id')
    contact.updated_at = timezone.now()

    _save(contact, changed)
    logger.info(f"Contact patched: {contact.pk} fields={patch.present_fields()} (organization {organization.pk})")
    return contact
