"""Serializers for request payloads and Event responses."""

from rest_framework import serializers

from directory.domain import Role


class CreateUserSerializer(serializers.Serializer):
    """Body of POST /api/create."""

    role = serializers.ChoiceField(choices=[role.value for role in Role], required=False, allow_null=True)


class CreateEventSerializer(serializers.Serializer):
    """Body of POST /api/events."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()


class AttendanceSerializer(serializers.Serializer):
    """Body of POST /api/attend-event and /api/unattend-event."""

    eventId = serializers.CharField()


class SearchQuerySerializer(serializers.Serializer):
    """Query string of GET /api/search-events."""

    query = serializers.CharField(trim_whitespace=False)

    def validate_query(self, value: str) -> str:
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.", code="blank")
        return value


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.SerializerMethodField()
    title = serializers.CharField()
    description = serializers.CharField()
    ownerId = serializers.CharField(source="owner_id")
    createdAt = serializers.DateTimeField(source="created_at")

    def get_id(self, event) -> str:
        return str(event.id)
