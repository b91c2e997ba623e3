# shopcenter/utils/retry.py
from tenacity import retry, stop_after_attempt, stop_after_delay, wait_exponential, retry_if_exception
import requests


def is_transient(exc: BaseException) -> bool:
    """Connection problems, timeouts, throttling and 5xx are worth another attempt."""
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code == 429 or exc.response.status_code >= 500
    return False


def http_retry(attempts: int = 3, max_delay: float | None = None):
    stop = stop_after_attempt(attempts)
    if max_delay is not None:
        stop = stop | stop_after_delay(max_delay)

    return retry(
        reraise=True,
        stop=stop,
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(is_transient),
    )
