from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from echosoul.core.errors import NotFoundError
from echosoul.schemas.profile import UserProfile


class ProfileRepo:
    """
    In-memory profile store keyed by user id.

    Each profile has its own re-entrant lock; ``locked(user_id)`` is the
    single-writer section service operations run in. Reads hand out deep
    copies so callers never share sub-collections with the store.
    """

    def __init__(self):
        self._profiles: Dict[str, UserProfile] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._meta_lock = threading.Lock()  # protects the two dicts

    def _lock_for(self, user_id: str) -> threading.RLock:
        with self._meta_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.RLock()
            return lock

    @contextmanager
    def locked(self, user_id: str) -> Iterator[None]:
        lock = self._lock_for(user_id)
        with lock:
            yield

    # ---- reads ---------------------------------------------------------------
    def exists(self, user_id: str) -> bool:
        with self._meta_lock:
            return user_id in self._profiles

    def find(self, user_id: str) -> Optional[UserProfile]:
        with self._meta_lock:
            profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile is not None else None

    def get(self, user_id: str) -> UserProfile:
        profile = self.find(user_id)
        if profile is None:
            raise NotFoundError("Profile not found.", user_id=user_id)
        return profile

    def user_ids(self) -> List[str]:
        with self._meta_lock:
            return list(self._profiles)

    def list_deployed(self) -> List[Tuple[str, str]]:
        """(username, owner_id) of deployed profiles, one profile lock at a time."""
        out: List[Tuple[str, str]] = []
        for user_id in self.user_ids():
            with self.locked(user_id):
                profile = self.find(user_id)
            if profile is not None and profile.deployed:
                out.append((profile.username or profile.user_id, profile.user_id))
        return out

    # ---- mutations -----------------------------------------------------------
    def put(self, profile: UserProfile) -> None:
        snapshot = profile.model_copy(deep=True)
        with self._meta_lock:
            self._profiles[snapshot.user_id] = snapshot

    def create(self, user_id: str, username: str = "") -> UserProfile:
        profile = UserProfile(user_id=user_id, username=username or user_id)
        self.put(profile)
        return profile.model_copy(deep=True)

    def get_or_create(self, user_id: str, username: str = "") -> UserProfile:
        with self.locked(user_id):
            found = self.find(user_id)
            if found is not None:
                return found
            return self.create(user_id, username)
