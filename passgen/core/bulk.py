from __future__ import annotations

import logging
from typing import Optional, Tuple

from passgen.core.credential_service import AnyRequest, generate, kind_for_request
from passgen.core.error_dialect import INVALID_COUNT, make_error
from passgen.core.models import BULK_MAX_COUNT, BULK_MIN_COUNT, BulkResult, GeneratedCredential, PasswordRequest
from passgen.core.passphrase_engine import Wordlist
from passgen.core.secure_random import RandomSource

logger = logging.getLogger(__name__)


def validate_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise make_error(INVALID_COUNT, "count must be an integer")
    if not (BULK_MIN_COUNT <= count <= BULK_MAX_COUNT):
        raise make_error(INVALID_COUNT, f"count must be between {BULK_MIN_COUNT} and {BULK_MAX_COUNT}")
    return count


def generate_credentials(
    count: int,
    request: Optional[AnyRequest] = None,
    rng: Optional[RandomSource] = None,
    *,
    wordlist: Optional[Wordlist] = None,
) -> Tuple[GeneratedCredential, ...]:
    validate_count(count)
    if request is None:
        request = PasswordRequest()
    kind = kind_for_request(request)
    credentials = tuple(generate(kind, request, rng, wordlist=wordlist) for _ in range(count))
    logger.debug("generated %d %s credential(s)", count, kind.value)
    return credentials


def generate_bulk(
    count: int,
    request: Optional[AnyRequest] = None,
    rng: Optional[RandomSource] = None,
    *,
    wordlist: Optional[Wordlist] = None,
) -> BulkResult:
    """Draw ``count`` independent values; every call returns a fresh immutable result."""
    credentials = generate_credentials(count, request, rng, wordlist=wordlist)
    return BulkResult(outputs=tuple(c.value for c in credentials), kind=credentials[0].kind)


__all__ = ["generate_bulk", "generate_credentials", "validate_count"]
