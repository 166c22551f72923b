"""
Password hashing

bcrypt is CPU-bound; the async methods run it in the thread pool so a hash
never stalls the event loop serving other requests.
"""

import bcrypt
from fastapi.concurrency import run_in_threadpool

DEFAULT_ROUNDS = 10


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # Compared against when the account is unknown, keeps login timing flat
        self._dummy_hash = self.hash_sync("dummy_password")

    def hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(self.verify_sync, password, password_hash)

    async def verify_dummy(self, password: str) -> None:
        await self.verify(password, self._dummy_hash)
