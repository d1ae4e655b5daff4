from django.urls import path

from hostel.realtime.consumers import CollectionConsumer

websocket_urlpatterns = [
    path("ws/collections/<str:collection>/", CollectionConsumer.as_asgi()),
]
