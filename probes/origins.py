"""
Origin Mutator
Builds the crafted Origin header values sent to every target.
"""

import random
import string
from collections.abc import Callable, Iterator
from urllib.parse import urlsplit

from core.errors import TargetParseError
from core.models import OriginCandidate, RandomSource, Strategy
from utils.logger import get_logger

logger = get_logger(__name__)

RANDOM_LENGTH = 12
RANDOM_CHARSET = string.ascii_lowercase


def random_label(rng: RandomSource, length: int = RANDOM_LENGTH) -> str:
    """Random lowercase alphabetic string"""
    return "".join(rng.choice(RANDOM_CHARSET) for _ in range(length))


def _split_target(target: str) -> tuple[str, str]:
    """Return (scheme, host[:port]) for a target or raise TargetParseError"""
    try:
        parts = urlsplit(target)
    except ValueError as e:
        raise TargetParseError(target, str(e)) from e

    # Drop any userinfo; the Origin only carries host and port
    host = parts.netloc.rpartition("@")[2]
    if not host:
        raise TargetParseError(target)
    return parts.scheme, host


def _strip_port(host: str) -> str:
    if host.startswith("["):
        return host[:host.index("]") + 1] if "]" in host else host
    return host.split(":", 1)[0]


def existing_policy(target: str, rng: RandomSource) -> str:
    return _split_target(target)[1]


def null_origin(target: str, rng: RandomSource) -> str:
    return "null"


def reflected_origin(target: str, rng: RandomSource) -> str:
    return random_label(rng) + ".com"


def scheme_origin(target: str, rng: RandomSource) -> str:
    scheme, host = _split_target(target)
    if scheme == "https":
        return f"http://{host}"
    return f"https://{host}"


def mangled_front_origin(target: str, rng: RandomSource) -> str:
    host = _split_target(target)[1]
    return random_label(rng) + host


def mangled_rear_origin(target: str, rng: RandomSource) -> str:
    """Inject a fake label between the first and last host labels"""
    hostname = _strip_port(_split_target(target)[1])
    labels = hostname.split(".")
    if len(labels) > 1:
        return f"{labels[0]}.{random_label(rng)}.{labels[-1]}"
    return f"{hostname}.{random_label(rng)}.com"


OriginHandler = Callable[[str, RandomSource], str]

HANDLERS: dict[Strategy, OriginHandler] = {
    Strategy.EXISTING_POLICY: existing_policy,
    Strategy.NULL_ORIGIN: null_origin,
    Strategy.REFLECTED_ORIGIN: reflected_origin,
    Strategy.SCHEME_ORIGIN: scheme_origin,
    Strategy.MANGLED_FRONT_ORIGIN: mangled_front_origin,
    Strategy.MANGLED_REAR_ORIGIN: mangled_rear_origin,
}

_missing = set(Strategy) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"no origin handler for: {sorted(s.value for s in _missing)}")


def build_origin(strategy: Strategy, target: str, rng: RandomSource | None = None) -> str:
    """
    Produce the Origin value for one strategy.

    Raises:
        TargetParseError: if the strategy needs a host and the target has none
    """
    return HANDLERS[strategy](target, rng or random.Random())


def origin_candidates(target: str, rng: RandomSource | None = None) -> Iterator[OriginCandidate]:
    """
    Yield one OriginCandidate per strategy, in order.

    Strategies that need a host are skipped when the target cannot be parsed;
    the remaining strategies still run.
    """
    rng = rng or random.Random()
    for strategy in Strategy:
        try:
            origin = build_origin(strategy, target, rng)
        except TargetParseError as e:
            logger.debug(f"Skipping {strategy.value}: {e}")
            continue
        yield OriginCandidate(strategy, origin)
