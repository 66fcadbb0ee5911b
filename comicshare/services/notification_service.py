"""Best-effort push notifications for subscribers.

The fan-out runs on a thread pool after the publishing transaction has
committed. A failure for one recipient is logged and counted; nothing here is
ever reported back to the HTTP request that triggered it.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed, wait
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)

FCM_ENDPOINT = "https://fcm.googleapis.com/v1/projects/{project}/messages:send"


class PushDeliveryError(Exception):
    pass


class LoggingPushClient:
    """Used when no push provider credentials are configured."""

    def send(self, token: str, title: str, body: str, data: Dict[str, str]) -> str:
        logger.info("Push (not delivered, provider disabled) to %s: %s", token[:12], title)
        return "logged"


class FcmPushClient:
    def __init__(
        self,
        project_id: str,
        access_token: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = FCM_ENDPOINT.format(project=project_id)
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, token: str, title: str, body: str, data: Dict[str, str]) -> str:
        message = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": {k: str(v) for k, v in data.items()},
            }
        }
        try:
            response = self.session.post(
                self.url,
                json=message,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PushDeliveryError(f"Push request failed: {exc}") from exc
        if response.status_code != 200:
            raise PushDeliveryError(
                f"Unexpected status code {response.status_code} from push provider"
            )
        return response.json().get("name", "")


def push_client_from_config(config):
    project_id = config.get("FCM_PROJECT_ID")
    access_token = config.get("FCM_ACCESS_TOKEN")
    if project_id and access_token:
        return FcmPushClient(
            project_id,
            access_token,
            timeout=config.get("FCM_REQUEST_TIMEOUT", 10.0),
        )
    return LoggingPushClient()


class _DispatcherState:
    def __init__(self, app, push_client, workers):
        self.app = app
        self.push_client = push_client
        self.jobs = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="notify-job")
        self.sends = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="notify-send")
        self.pending = set()
        self.lock = threading.Lock()


class NotificationDispatcher:
    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app, push_client=None):
        workers = max(1, int(app.config.get("NOTIFICATION_WORKERS", 4)))
        client = push_client or push_client_from_config(app.config)
        app.extensions["notifications"] = _DispatcherState(app, client, workers)

    @staticmethod
    def _state(app=None):
        if app is None:
            from flask import current_app

            app = current_app._get_current_object()
        return app.extensions["notifications"]

    def use_push_client(self, client, app=None):
        self._state(app).push_client = client

    def notify_new_comic(self, creator_id, creator_name, comic_id, title, app=None):
        """Schedule the fan-out for a freshly committed comic and return at once."""
        state = self._state(app)
        try:
            future = state.jobs.submit(
                self._fan_out, state, creator_id, creator_name, comic_id, title
            )
        except RuntimeError:
            logger.exception("Could not schedule notifications for comic %s", comic_id)
            return None
        with state.lock:
            state.pending.add(future)
        future.add_done_callback(lambda f: self._forget(state, f))
        return future

    @staticmethod
    def _forget(state, future):
        with state.lock:
            state.pending.discard(future)

    def join(self, timeout=None, app=None):
        """Wait for scheduled fan-outs; used on shutdown and in tests."""
        state = self._state(app)
        with state.lock:
            pending = list(state.pending)
        if pending:
            wait(pending, timeout=timeout)

    def _fan_out(self, state, creator_id, creator_name, comic_id, title):
        from comicshare.repositories.subscription_repository import SubscriptionRepository

        try:
            with state.app.app_context():
                targets = SubscriptionRepository().push_targets_for(creator_id)
        except Exception:
            logger.exception("Could not load subscribers of %s", creator_id)
            return 0, 0
        if not targets:
            return 0, 0

        notification_title = "New comic"
        body = f'{creator_name or "Author"} published a new comic: "{title}"'
        data = {
            "type": "new_comic",
            "comic_id": comic_id,
            "creator_id": creator_id,
            "click_action": "FLUTTER_NOTIFICATION_CLICK",
        }
        futures = [
            state.sends.submit(
                self._send_one, state.push_client, user_id, token, notification_title, body, data
            )
            for user_id, token in targets
        ]
        sent = failed = 0
        for future in as_completed(futures):
            if future.result():
                sent += 1
            else:
                failed += 1
        logger.info(
            "Notifications for comic %s: %d sent, %d failed", comic_id, sent, failed
        )
        return sent, failed

    @staticmethod
    def _send_one(client, user_id, token, title, body, data):
        try:
            client.send(token, title, body, data)
            return True
        except Exception:
            logger.exception("Error sending notification to user %s", user_id)
            return False
