import logging
import threading
import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool
from app.config import settings
from app.utils.errors import UpstreamError

logger = logging.getLogger(__name__)

_firebase_app = None
_init_lock = threading.Lock()


def _ensure_firebase_initialized():
    """Ensure the Firebase Admin app is initialized"""
    global _firebase_app
    with _init_lock:
        if _firebase_app is None:
            if not settings.FIREBASE_CREDENTIALS_PATH:
                raise UpstreamError("Firebase credentials not configured. Please set FIREBASE_CREDENTIALS_PATH in .env")
            try:
                cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
            except (OSError, ValueError) as e:
                raise UpstreamError(f"Invalid Firebase credentials: {str(e)}")
            _firebase_app = firebase_admin.initialize_app(cred)
    return _firebase_app


def _delete_user(firebase_uid: str) -> None:
    app = _ensure_firebase_initialized()
    try:
        auth.delete_user(firebase_uid, app=app)
    except auth.UserNotFoundError:
        # Already gone on the provider side
        logger.warning(f"Firebase account {firebase_uid} not found, treating as deleted")


async def delete_firebase_account(firebase_uid: str) -> bool:
    """Delete the external identity provider account for a user"""
    try:
        await run_in_threadpool(_delete_user, firebase_uid)
    except FirebaseError as e:
        logger.error(f"Failed to delete Firebase account {firebase_uid}: {str(e)}")
        raise UpstreamError("Failed to delete user")

    logger.info(f"Firebase account {firebase_uid} deleted")
    return True
