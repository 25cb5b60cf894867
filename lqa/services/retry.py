"""
Retry mit exponentiellem Backoff und Modell-Fallback in einer Schleife.

Ein Plan ist eine geordnete Liste von (Modell, Retry-Budget). Jedes Modell
bekommt 1 + retries Versuche, vor Retry k wird base_delay_ms * 2**k gewartet.
Ist das Budget eines Modells verbraucht, geht es ohne Wartezeit mit dem
nächsten Modell weiter. Erst wenn der ganze Plan verbraucht ist, wird ein
RetryExhaustedError geworfen.

ConfigurationError wird nie wiederholt.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple, TypeVar

from lqa.core.errors import ConfigurationError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ModelAttempt:
    model: str
    retries: int = 0


def build_plan(models: Sequence[str], retries: int) -> List[ModelAttempt]:
    """Gleiches Retry-Budget für jedes Modell, Reihenfolge bleibt erhalten."""
    return [ModelAttempt(model=m, retries=retries) for m in models if m]


def backoff_delays(retries: int, base_delay_ms: int) -> List[int]:
    """Wartezeiten (ms) vor jedem Retry, z.B. retries=2 -> [1000, 2000]."""
    return [base_delay_ms * (2 ** k) for k in range(retries)]


def run_with_fallback(
    plan: Sequence[ModelAttempt],
    call: Callable[[str], T],
    *,
    base_delay_ms: int = 1000,
    sleep: Callable[[float], None] = time.sleep,
    label: str = "LLM",
) -> Tuple[T, str]:
    """
    Führt call(model) gemäß Plan aus.

    Returns:
        (Ergebnis, Modell-ID des erfolgreichen Versuchs)
    """
    if not plan:
        raise ValueError("Retry plan must contain at least one model")

    attempted: List[str] = []
    last_error: Exception | None = None

    for index, attempt in enumerate(plan):
        if index > 0:
            logger.warning(
                "%s: %s failed, switching to fallback model %s. Error: %s",
                label,
                plan[index - 1].model,
                attempt.model,
                last_error,
            )

        delays = backoff_delays(attempt.retries, base_delay_ms)
        for try_no in range(attempt.retries + 1):
            attempted.append(attempt.model)
            try:
                return call(attempt.model), attempt.model
            except ConfigurationError:
                raise
            except Exception as e:
                last_error = e
                if try_no >= attempt.retries:
                    break
                delay_ms = delays[try_no]
                logger.warning(
                    "%s call failed on %s, retrying in %dms... (%d left). Error: %s",
                    label,
                    attempt.model,
                    delay_ms,
                    attempt.retries - try_no,
                    e,
                )
                sleep(delay_ms / 1000.0)

    raise RetryExhaustedError(
        f"{label} failed on all models ({', '.join(a.model for a in plan)}): {last_error}",
        attempts=attempted,
    ) from last_error
