from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.contacts import services
from apps.contacts.serializers import ContactSerializer, ContactUpdateSerializer


class ContactViewSet(viewsets.ViewSet):
    lookup_value_regex = r"\d+"

    def list(self, request):
        return Response(ContactSerializer(services.list_contacts(), many=True).data)

    def create(self, request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        contact = services.create_contact(data=serializer.validated_data)
        return Response(ContactSerializer(contact).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ContactSerializer(services.get_contact(pk)).data)

    def partial_update(self, request, pk=None):
        contact = services.get_contact(pk)
        serializer = ContactUpdateSerializer(contact, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        contact = services.update_contact(contact, data=serializer.validated_data)
        return Response(ContactSerializer(contact).data)

    def destroy(self, request, pk=None):
        services.delete_contact(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"email/(?P<email>[^/]+)")
    def by_email(self, request, email=None):
        return Response(ContactSerializer(services.get_contact_by_email(email)).data)
