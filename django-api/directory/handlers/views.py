"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to handlers.exceptions
- Never contain business logic
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from directory import wiring
from directory.domain import Role
from directory.domain.errors import InvalidFieldError, MissingFieldError
from directory.handlers.serializers import (
    AttendanceSerializer,
    CreateEventSerializer,
    CreateUserSerializer,
    EventSerializer,
    SearchQuerySerializer,
)


MISSING_CODES = {"required", "blank", "null"}


def _validated(serializer_class, data, missing_message: str) -> dict:
    serializer = serializer_class(data=data)
    if serializer.is_valid():
        return serializer.validated_data

    missing = tuple(
        field for field, errors in serializer.errors.items() if any(error.code in MISSING_CODES for error in errors)
    )
    if missing:
        raise MissingFieldError(missing_message, fields=missing)

    field, errors = next(iter(serializer.errors.items()))
    raise InvalidFieldError(field, f"{field}: {errors[0]}")


class CreateUserView(APIView):
    """Handler for POST /api/create"""

    def post(self, request: Request) -> Response:
        serializer = CreateUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = serializer.validated_data.get("role")

        result = wiring.get_user_directory().ensure_user(
            request.user.identity,
            Role(role) if role else None,
        )
        return Response({"Status": "User created" if result.created else "User already exists"})


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    def get(self, request: Request) -> Response:
        events = wiring.get_event_catalog().list_own_events(request.user.identity)
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(CreateEventSerializer, request.data, "Title and description are required.")
        event_id = wiring.get_event_catalog().create_event(
            request.user.identity,
            data["title"],
            data["description"],
        )
        return Response(
            {"message": "Event created successfully!", "id": str(event_id)},
            status=status.HTTP_201_CREATED,
        )


class EventSearchView(APIView):
    """Handler for GET /api/search-events?query="""

    def get(self, request: Request) -> Response:
        data = _validated(SearchQuerySerializer, request.query_params, "Query parameter is required.")
        events = wiring.get_event_catalog().search_by_title_prefix(data["query"])
        return Response(EventSerializer(events, many=True).data)


class AttendEventView(APIView):
    """Handler for POST /api/attend-event"""

    def post(self, request: Request) -> Response:
        data = _validated(AttendanceSerializer, request.data, "Event ID is required.")
        wiring.get_attendance_ledger().attend(request.user.identity, data["eventId"])
        return Response({"message": "Event added to user history."})


class UnattendEventView(APIView):
    """Handler for POST /api/unattend-event"""

    def post(self, request: Request) -> Response:
        data = _validated(AttendanceSerializer, request.data, "Event ID is required.")
        wiring.get_attendance_ledger().unattend(request.user.identity, data["eventId"])
        return Response({"message": "Event removed from user history."})
