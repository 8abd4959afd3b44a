# slashbot/discordapp/urls.py

"""
URL Configuration for the Discord App Integration.

Discord delivers every interaction to one endpoint, so this app exposes a
single route.
"""

from django.urls import path
from . import views

app_name = 'discordapp'

urlpatterns = [
    # Set this URL as the "Interactions Endpoint URL" in the developer portal.
    path("interactions/", views.interactions, name="interactions"),
]
