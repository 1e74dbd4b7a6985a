"""
Dedup and company resolution for contacts

Both resolvers work only inside one organization and only on records
that are not soft-deleted.

Company creation is read-then-insert. The insert runs in a savepoint
and the (organization, lower(name)) unique constraint rejects a second
concurrent insert; the loser re-reads and returns the winner's id.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.core.exceptions import ValidationError, store_errors

from .models import ClientCompany, Contact
from .normalize import normalize_text

logger = logging.getLogger(__name__)


def find_duplicate_contact(organization, email=None, phone=None):
    """
    Return the live contact matching email OR phone, or None.

    Raises ValidationError when email and phone point at two different
    contacts: merging them is a product decision, not something to guess.
    """
    if not email and not phone:
        return None

    predicate = Q()
    if email:
        predicate |= Q(email=email)
    if phone:
        predicate |= Q(phone=phone)

    with store_errors():
        matches = list(
            Contact.objects.alive()
            .for_organization(organization)
            .filter(predicate)
            .order_by('created_at', 'id')[:2]
        )

    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            f"Dedup conflict in organization {organization.pk}: email and phone "
            f"match contacts {matches[0].pk} and {matches[1].pk}"
        )
        raise ValidationError('email and phone belong to different contacts')
    return matches[0]


def _find_company(organization, name):
    return (
        ClientCompany.objects.alive()
        .for_organization(organization)
        .filter(name__iexact=name)
        .order_by('created_at')
        .first()
    )


def resolve_company_id(organization, company_name):
    """
    Find-or-create a client company by case-insensitive name.

    Returns the company id, or None when the name is empty.
    """
    name = normalize_text(company_name)
    if not name:
        return None

    with store_errors():
        existing = _find_company(organization, name)
        if existing is not None:
            return existing.pk

        now = timezone.now()
        try:
            with transaction.atomic():
                company = ClientCompany.objects.create(
                    organization=organization,
                    name=name,
                    created_at=now,
                    updated_at=now,
                )
        except IntegrityError:
            # Someone else created it between our read and our insert
            existing = _find_company(organization, name)
            if existing is None:
                raise
            return existing.pk

    logger.info(f"Client company created: {company.pk} - {company.name} (organization {organization.pk})")
    return company.pk


def resolve_client_company(organization, company_id):
    """
    Return the id of a live company of this organization, or raise
    ValidationError (ids from other tenants are treated as unknown).
    """
    with store_errors():
        exists = (
            ClientCompany.objects.alive()
            .for_organization(organization)
            .filter(pk=company_id)
            .exists()
        )
    if not exists:
        raise ValidationError('Unknown client_company_id')
    return company_id

