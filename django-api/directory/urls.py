from django.urls import path

from directory.handlers.views import (
    AttendEventView,
    CreateUserView,
    EventListView,
    EventSearchView,
    UnattendEventView,
)

urlpatterns = [
    path("create", CreateUserView.as_view(), name="user-create"),
    path("events", EventListView.as_view(), name="event-list"),
    path("search-events", EventSearchView.as_view(), name="event-search"),
    path("attend-event", AttendEventView.as_view(), name="event-attend"),
    path("unattend-event", UnattendEventView.as_view(), name="event-unattend"),
]
