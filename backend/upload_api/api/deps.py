from fastapi import Header

from upload_api.core.errors import Unauthenticated


async def require_authorization(
    authorization: str | None = Header(default=None),
) -> str:
    # Presence only; token authenticity is verified upstream, if at all.
    if not authorization:
        raise Unauthenticated()
    return authorization
