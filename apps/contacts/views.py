import json

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import public_api_view
from apps.core.exceptions import ValidationError

from . import services
from .normalize import is_valid_uuid
from .patch import ContactPatch
from .serializers import ContactPatchSerializer, ContactUpsertSerializer, describe_errors


def _parse_payload(request, serializer_class, config):
    """
    JSON body -> ContactPatch, or ValidationError.

    Every field is normalized before anything touches the database.
    """
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError('Invalid payload: body must be a JSON object')

    serializer = serializer_class(data=body)
    if not serializer.is_valid():
        raise ValidationError(describe_errors(serializer.errors))

    return ContactPatch.from_payload(serializer.validated_data, phone_region=config.phone_region)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@public_api_view
def contact_collection_view(request, organization, config):
    """
    GET  -> {"data": [Contact], "nextCursor": str|null}
    POST -> {"data": Contact, "action": "created"|"updated"} (201 on create)
    """
    if request.method == 'GET':
        contacts, next_cursor = services.list_contacts(organization, request.GET, config)
        return JsonResponse({
            'data': [contact.to_dict() for contact in contacts],
            'nextCursor': next_cursor,
        })

    patch = _parse_payload(request, ContactUpsertSerializer, config)
    contact, created = services.upsert_contact(organization, patch)

    if created:
        return JsonResponse({'data': contact.to_dict(), 'action': 'created'}, status=201)
    return JsonResponse({'data': contact.to_dict(), 'action': 'updated'})


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@public_api_view
def contact_detail_view(request, contact_id, organization, config):
    """
    GET   -> {"data": Contact} or 404
    PATCH -> {"data": Contact} or 404/422
    """
    if request.method == 'GET':
        contact = services.get_contact(organization, contact_id)
        return JsonResponse({'data': contact.to_dict()})

    # Path id format is checked before the body
    if not is_valid_uuid(contact_id):
        raise ValidationError('Invalid contact id')

    patch = _parse_payload(request, ContactPatchSerializer, config)
    contact = services.update_contact(organization, contact_id, patch)
    return JsonResponse({'data': contact.to_dict()})
