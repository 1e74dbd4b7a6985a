"""
Partial-update builder for contacts

ContactPatch has one attribute per writable Contact field. A field that
was not in the request stays UNSET and is never applied; a field that
was sent holds its normalized value (None clears the column).
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from apps.core.exceptions import ValidationError

from . import normalize


class _Unset:

    def __repr__(self):
        return 'UNSET'


UNSET = _Unset()

_TEXT_FIELDS = ('name', 'role', 'company_name', 'avatar', 'status', 'stage', 'source', 'notes')
_DATE_FIELDS = ('birth_date', 'last_purchase_date')


@dataclass
class ContactPatch:
    name: Union[Optional[str], _Unset] = UNSET
    email: Union[Optional[str], _Unset] = UNSET
    phone: Union[Optional[str], _Unset] = UNSET
    role: Union[Optional[str], _Unset] = UNSET
    company_name: Union[Optional[str], _Unset] = UNSET
    client_company_id: Union[Optional[str], _Unset] = UNSET
    avatar: Union[Optional[str], _Unset] = UNSET
    status: Union[Optional[str], _Unset] = UNSET
    stage: Union[Optional[str], _Unset] = UNSET
    source: Union[Optional[str], _Unset] = UNSET
    notes: Union[Optional[str], _Unset] = UNSET
    birth_date: Union[Optional[str], _Unset] = UNSET
    last_interaction: Union[Optional[datetime], _Unset] = UNSET
    last_purchase_date: Union[Optional[str], _Unset] = UNSET
    total_value: Union[Optional[Decimal], _Unset] = UNSET

    @classmethod
    def from_payload(cls, data, phone_region=None):
        """
        Normalize every field present in validated serializer data.

        Raises ValidationError naming the first date/timestamp field
        that cannot be parsed; nothing is applied in that case.
        """
        patch = cls()

        for name in _TEXT_FIELDS:
            if name in data:
                setattr(patch, name, normalize.normalize_text(data[name]))

        if 'email' in data:
            patch.email = normalize.normalize_email(data['email'])
        if 'phone' in data:
            patch.phone = normalize.normalize_phone(data['phone'], region=phone_region)

        if 'client_company_id' in data:
            value = data['client_company_id']
            patch.client_company_id = normalize.sanitize_uuid(value) if value is not None else None

        for name in _DATE_FIELDS:
            if name in data:
                value = normalize.normalize_date(data[name])
                if normalize.is_invalid(value):
                    raise ValidationError(f'Invalid {name}')
                setattr(patch, name, value)

        if 'last_interaction' in data:
            value = normalize.normalize_timestamp(data['last_interaction'])
            if normalize.is_invalid(value):
                raise ValidationError('Invalid last_interaction')
            patch.last_interaction = value

        if 'total_value' in data:
            value = data['total_value']
            patch.total_value = Decimal(str(value)) if value is not None else None

        return patch

    def is_set(self, name):
        return getattr(self, name) is not UNSET

    def value(self, name, default=None):
        """Normalized value, or default when the field was not sent"""
        current = getattr(self, name)
        return default if current is UNSET else current

    def present_fields(self):
        return [f.name for f in fields(self) if self.is_set(f.name)]

    def apply_to(self, contact, exclude=()):
        """
        Copy every present field onto the contact (client_company_id is
        written to the FK column). Returns the names of the model fields
        that were set.
        """
        changed = []
        for name in self.present_fields():
            if name in exclude:
                continue
            setattr(contact, name, getattr(self, name))
            changed.append(name)
        return changed
