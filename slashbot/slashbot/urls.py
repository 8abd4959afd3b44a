# slashbot/slashbot/urls.py

"""
Root URL Configuration for the Slashbot Project.

- `/discord/`: Delegates the Discord interactions webhook to `discordapp`.
"""

from django.urls import include, path

urlpatterns = [
    # A request to `/discord/interactions/` is routed to `discordapp.urls`.
    path('discord/', include('discordapp.urls')),
]
