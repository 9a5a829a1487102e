from django.utils import timezone
from rest_framework import serializers

from apps.common.serializers import OptionalTextField
from apps.contacts.models import Contact

PHONE_PATTERN = r"^\+?[0-9]{9,15}\Z"
UPDATE_FIELDS = ("first_name", "last_name", "phone", "address", "birth_date", "notes")


def validate_birth_date(value):
    if value is not None and value >= timezone.localdate():
        raise serializers.ValidationError("birthDate must be in the past")
    return value


class ContactSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source="first_name", min_length=2, max_length=50)
    lastName = serializers.CharField(source="last_name", min_length=2, max_length=50)
    email = serializers.EmailField(max_length=100)
    phone = serializers.RegexField(
        PHONE_PATTERN,
        required=False,
        allow_null=True,
        error_messages={"invalid": "phone must contain between 9 and 15 digits"},
    )
    address = OptionalTextField(max_length=200)
    birthDate = serializers.DateField(source="birth_date", required=False, allow_null=True, validators=[validate_birth_date])
    notes = OptionalTextField(max_length=500)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Contact
        fields = [
            "id",
            "firstName",
            "lastName",
            "email",
            "phone",
            "address",
            "birthDate",
            "notes",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]

    def validate_email(self, value):
        return value.strip().lower()


class ContactUpdateSerializer(serializers.Serializer):
    """Partial update: absent fields keep their stored value.

    Validation runs against the merged record so a patch can never leave the
    contact in a state that creation would have rejected.
    """

    firstName = serializers.CharField(source="first_name", min_length=2, max_length=50, required=False)
    lastName = serializers.CharField(source="last_name", min_length=2, max_length=50, required=False)
    phone = serializers.RegexField(
        PHONE_PATTERN,
        required=False,
        allow_null=True,
        error_messages={"invalid": "phone must contain between 9 and 15 digits"},
    )
    address = OptionalTextField(max_length=200)
    birthDate = serializers.DateField(source="birth_date", required=False, allow_null=True)
    notes = OptionalTextField(max_length=500)

    def validate(self, attrs):
        merged = {field: getattr(self.instance, field) for field in UPDATE_FIELDS}
        merged.update(attrs)
        errors = {}
        try:
            validate_birth_date(merged["birth_date"])
        except serializers.ValidationError as exc:
            errors["birthDate"] = exc.detail
        if not (merged["first_name"] or "").strip():
            errors["firstName"] = "firstName is required"
        if not (merged["last_name"] or "").strip():
            errors["lastName"] = "lastName is required"
        if errors:
            raise serializers.ValidationError(errors)
        return attrs

