"""Quick smoke test for the Redis-backed session store.

Run with REDIS_URL set to a reachable Redis instance.
"""

from __future__ import annotations

import asyncio
import os
import sys

from oidc_session.exceptions import SessionNotFoundError
from oidc_session.models import TokenBundle
from oidc_session.session_storage.redis_backend import RedisSessionStore
from oidc_session.user_session import UserSessionManager


class SmokeFailure(RuntimeError):
    pass


async def run_smoke(redis_url: str) -> None:
    store = RedisSessionStore(redis_url, key_prefix="oidc_session:smoke", ttl_seconds=5)
    sessions = UserSessionManager(store)

    print(f"[+] Connected to Redis at {redis_url}")

    session_id = await sessions.create_user_session("smoke-user", TokenBundle(access_token="token-1"))
    record = await sessions.get_user_session(session_id)
    if record.access_token != "token-1":
        raise SmokeFailure(f"Expected token-1 immediately after create, got {record.access_token!r}")
    print("[+] Initial session written and retrieved")

    replaced_id = await sessions.create_user_session("smoke-user", TokenBundle(access_token="token-2"))
    if replaced_id != session_id:
        raise SmokeFailure("Re-authentication produced a different session id")
    record = await sessions.get_user_session(session_id)
    if record.access_token != "token-2":
        raise SmokeFailure(f"Expected token-2 after re-authentication, got {record.access_token!r}")
    print("[+] Re-authentication replaced the stored session")

    await sessions.destroy_user_session(session_id)
    await sessions.destroy_user_session(session_id)
    if await sessions.lookup_user_session(session_id) is not None:
        raise SmokeFailure("Session still present after destroy")
    print("[+] Session destroyed (twice, idempotently)")

    await sessions.create_user_session("smoke-user", TokenBundle(access_token="token-3"))
    print("[+] Waiting for TTL to expire...")
    await asyncio.sleep(6)

    try:
        await sessions.get_user_session(session_id)
    except SessionNotFoundError:
        print("[+] Session evicted by Redis as expected")
    else:
        raise SmokeFailure("Session still present after TTL expiry")

    await store.close()
    print("[✓] Redis session store smoke test passed")


def main() -> int:
    redis_url = os.environ.get("REDIS_URL")
    if not redis_url:
        print("ERROR: REDIS_URL environment variable not set", file=sys.stderr)
        return 2

    try:
        asyncio.run(run_smoke(redis_url))
    except SmokeFailure as exc:
        print(f"SMOKE FAILURE: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130
    except Exception as exc:  # pragma: no cover
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
