import logging

from rest_framework import viewsets

from apps.common.exceptions import ResourceNotFound
from apps.notes.models import Note
from apps.notes.serializers import NoteSerializer

logger = logging.getLogger(__name__)


class NoteViewSet(viewsets.ModelViewSet):
    queryset = Note.objects.order_by("-last_modified", "-id")
    serializer_class = NoteSerializer
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "put", "delete", "head", "options"]

    def get_object(self):
        try:
            return self.get_queryset().get(pk=self.kwargs["pk"])
        except Note.DoesNotExist:
            raise ResourceNotFound(f"Note with id {self.kwargs['pk']} not found.")

    def perform_create(self, serializer):
        note = serializer.save()
        logger.info("Note %s created", note.id)

    def perform_update(self, serializer):
        note = serializer.save()
        logger.info("Note %s updated", note.id)

    def perform_destroy(self, instance):
        note_id = instance.id
        instance.delete()
        logger.info("Note %s deleted", note_id)
