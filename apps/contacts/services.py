import logging

from django.db import IntegrityError, transaction

from apps.common.exceptions import DuplicateEmail, ResourceNotFound
from apps.contacts.models import Contact

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("first_name", "last_name", "email", "phone", "address", "birth_date", "notes")


def create_contact(*, data) -> Contact:
    email = data["email"]
    logger.info("Creating contact with email %s", email)
    if Contact.objects.filter(email=email).exists():
        logger.warning("Rejected contact with duplicate email %s", email)
        raise DuplicateEmail(email)

    try:
        with transaction.atomic():
            contact = Contact.objects.create(**{field: data.get(field) for field in CREATE_FIELDS})
    except IntegrityError as exc:
        if Contact.objects.filter(email=email).exists():
            raise DuplicateEmail(email) from exc
        raise

    logger.info("Contact %s created", contact.id)
    return contact


def list_contacts():
    return Contact.objects.order_by("last_name", "first_name", "id")


def get_contact(contact_id) -> Contact:
    try:
        return Contact.objects.get(pk=contact_id)
    except Contact.DoesNotExist:
        raise ResourceNotFound(f"Contact with id {contact_id} not found.")


def get_contact_by_email(email) -> Contact:
    try:
        return Contact.objects.get(email=email.strip().lower())
    except Contact.DoesNotExist:
        raise ResourceNotFound(f"Contact with email {email} not found.")


def update_contact(contact, *, data) -> Contact:
    """Apply a validated partial update; only the supplied fields are written."""
    if not data:
        return contact
    with transaction.atomic():
        for field, value in data.items():
            setattr(contact, field, value)
        contact.save(update_fields=[*data.keys(), "updated_at"])
    logger.info("Contact %s updated (%s)", contact.id, ", ".join(sorted(data)))
    return contact


def delete_contact(contact_id):
    deleted, _ = Contact.objects.filter(pk=contact_id).delete()
    if not deleted:
        raise ResourceNotFound(f"Contact with id {contact_id} not found.")
    logger.info("Contact %s deleted", contact_id)
