# services/firestore.py
import logging
import os
from typing import AsyncGenerator, Iterable, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore_v1.async_client import AsyncClient
from pydantic import ValidationError

import config
from models.user import UserInDB
from models.weight_log import WeightSample


def initialize_firebase_app():
    if not firebase_admin._apps:
        cred_path = os.path.join(
            os.path.dirname(__file__), "..", "service-account.json"
        )
        if not os.path.exists(cred_path):
            raise FileNotFoundError(f"Service account key not found at {cred_path}.")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred)
        logging.info("Firebase Admin SDK initialized successfully.")


class FirestoreService:
    """Read-only access to users and their weight logs."""

    def __init__(self, db: Optional[AsyncClient] = None):
        if db is None:
            initialize_firebase_app()
            db = firestore_async.client()
        self.db: AsyncClient = db

    def _weight_logs_ref(self, uid: str):
        return (
            self.db.collection(config.USERS_COLLECTION)
            .document(uid)
            .collection(config.WEIGHT_LOGS_COLLECTION)
        )

    async def get_all_users(
        self, page_size: int = config.USERS_PAGE_SIZE
    ) -> AsyncGenerator[UserInDB, None]:
        users_ref = self.db.collection(config.USERS_COLLECTION)
        cursor = None
        while True:
            query = users_ref.order_by("__name__").limit(page_size)
            if cursor:
                query = query.start_after(cursor)
            docs = await query.get()
            if not docs:
                break
            for doc in docs:
                try:
                    user = UserInDB.model_validate({**doc.to_dict(), "uid": doc.id})
                except ValidationError as e:
                    logging.warning(f"Skipping malformed user document {doc.id}: {e}")
                    continue
                yield user
            cursor = docs[-1]

    async def get_weight_history(self, uid: str) -> List[WeightSample]:
        """All weight logs for a user, oldest first."""
        query = self._weight_logs_ref(uid).order_by("date")
        docs = await query.get()
        return _to_weight_samples(uid, docs)


def _to_weight_samples(uid: str, docs: Iterable) -> List[WeightSample]:
    samples = []
    for doc in docs:
        try:
            samples.append(WeightSample.model_validate({"id": doc.id, **doc.to_dict()}))
        except ValidationError as e:
            logging.warning(
                f"Skipping malformed weight log {doc.id} for user {uid}: {e}"
            )
    return samples
