from rest_framework import serializers
from rest_framework.fields import empty


class OptionalTextField(serializers.CharField):
    """Optional free text where blank input is stored as NULL, never as ``""``."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("allow_blank", True)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        return super().run_validation(data) or None
