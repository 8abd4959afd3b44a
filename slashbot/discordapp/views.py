# slashbot/discordapp/views.py

"""
HTTP Entry Point for Discord Interactions.

Discord POSTs every interaction (pings and slash commands alike) to the single
"Interactions Endpoint URL" configured for the application. This view hands
the raw request to the dispatcher and serializes whatever it decides.
"""

# Standard library imports
import logging

# Django imports
from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

# Local application imports
from .dispatcher import dispatch
from .security import RawRequest, load_trusted_key

LOGGER = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {
    "title": "Internal Server Error",
    "detail": "An unexpected error occurred.",
}


@csrf_exempt
@require_POST
def interactions(request: HttpRequest) -> JsonResponse:
    """
    Receives a Discord interaction and responds with the dispatcher's result.

    The signature check needs the body byte-for-byte, so `request.body` is
    passed along untouched and never decoded here.
    """
    try:
        raw_request = RawRequest.from_headers(request.body, request.headers)
        trusted_key = load_trusted_key(settings.DISCORD_PUBLIC_KEY)
        result = dispatch(
            raw_request,
            trusted_key,
            timestamp_tolerance=settings.DISCORD_TIMESTAMP_TOLERANCE,
        )
        return JsonResponse(result.body, status=result.status)

    except Exception as e:
        LOGGER.exception(f"Unexpected error in interactions view: {e}")
        return JsonResponse(INTERNAL_ERROR_BODY, status=500)
