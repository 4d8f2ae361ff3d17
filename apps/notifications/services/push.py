"""
Push notification fan-out through Firebase Cloud Messaging.

Note:
    Requires the ``firebase-admin`` library. The service account comes from
    the FIREBASE_CREDENTIALS setting, either the JSON document itself or a
    path to the key file.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from django.conf import settings

from apps.notifications.models import NotificationToken

from .exceptions import PushDeliveryError


logger = logging.getLogger(__name__)

# FCM accepts at most 500 tokens per multicast
MULTICAST_LIMIT = 500

INVALID_TOKEN_CODES = {
    'NOT_FOUND',
    'INVALID_ARGUMENT',
    'UNREGISTERED',
    'registration-token-not-registered',
    'invalid-registration-token',
}


def get_firebase_app():
    """Return the default Firebase app, initializing it on first use."""
    import firebase_admin
    from firebase_admin import credentials

    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    raw = (settings.FIREBASE_CREDENTIALS or '').strip()
    if not raw:
        raise PushDeliveryError("FIREBASE_CREDENTIALS is not configured")

    try:
        certificate = json.loads(raw) if raw.startswith('{') else raw
        app = firebase_admin.initialize_app(credentials.Certificate(certificate))
    except (ValueError, OSError) as e:
        raise PushDeliveryError(f"Failed to initialize Firebase: {e}") from e

    logger.info("Firebase Admin SDK initialized")
    return app


def _is_invalid_token(error) -> bool:
    return getattr(error, 'code', None) in INVALID_TOKEN_CODES


def _chunks(tokens: List[str], size: int) -> Iterable[List[str]]:
    for start in range(0, len(tokens), size):
        yield tokens[start:start + size]


def send_multicast(
    *,
    tokens: List[str],
    title: str,
    body: str,
    data: Optional[Dict[str, str]] = None
) -> Tuple[int, int, List[str]]:
    """
    Send one notification to many tokens.

    Returns:
        tuple: (success count, failure count, tokens that are no longer valid)

    Raises:
        PushDeliveryError: If Firebase is not configured or a batch fails
    """
    from firebase_admin import exceptions as firebase_exceptions
    from firebase_admin import messaging

    app = get_firebase_app()
    payload = {key: str(value) for key, value in (data or {}).items()}

    success, failure, invalid = 0, 0, []
    for chunk in _chunks(tokens, MULTICAST_LIMIT):
        message = messaging.MulticastMessage(
            tokens=chunk,
            notification=messaging.Notification(title=title, body=body),
            data=payload,
        )
        try:
            response = messaging.send_each_for_multicast(message, app=app)
        except firebase_exceptions.FirebaseError as e:
            raise PushDeliveryError(f"Failed to send notification: {e}") from e

        success += response.success_count
        failure += response.failure_count
        for token, result in zip(chunk, response.responses):
            if not result.success and _is_invalid_token(result.exception):
                invalid.append(token)

    return success, failure, invalid


def send_to_all(*, title: str, body: str, data: Optional[Dict[str, str]] = None) -> dict:
    """
    Push a notification to every registered token.

    Tokens FCM reports as unregistered or invalid are deleted.

    Returns:
        dict: ``successCount``, ``failureCount``, ``invalidTokensRemoved``
    """
    tokens = list(NotificationToken.objects.values_list('token', flat=True))
    if not tokens:
        logger.info("No notification tokens registered, nothing to send")
        return {'successCount': 0, 'failureCount': 0, 'invalidTokensRemoved': 0}

    success, failure, invalid = send_multicast(tokens=tokens, title=title, body=body, data=data)

    removed = 0
    if invalid:
        removed, _ = NotificationToken.objects.filter(token__in=invalid).delete()

    logger.info(
        "Push '%s': %d sent, %d failed, %d invalid tokens removed",
        title, success, failure, removed
    )
    return {
        'successCount': success,
        'failureCount': failure,
        'invalidTokensRemoved': removed,
    }
