from rest_framework import serializers

from apps.notes.models import Note


class NoteSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    lastModified = serializers.DateTimeField(source="last_modified", read_only=True)

    class Meta:
        model = Note
        fields = ["id", "title", "content", "createdAt", "lastModified"]
        read_only_fields = ["id"]
