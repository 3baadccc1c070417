# core/sms_client.py
import httpx

from core.config import settings
from core.logging_config import get_logger

logger = get_logger(__name__)


class SmsError(Exception):
    """The MiM gateway refused the message or could not be reached."""


def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)


async def send_sms(mobile_number: str, message: str) -> dict:
    payload = {
        "UserName": settings.MIM_SMS_USERNAME,
        "Apikey": settings.MIM_SMS_APIKEY,
        "MobileNumber": mobile_number,
        "CampaignId": "null",
        "SenderName": settings.MIM_SMS_SENDER_NAME,
        "TransactionType": "T",
        "Message": message,
    }
    try:
        async with http_client() as client:
            response = await client.post(settings.MIM_SMS_URL, json=payload)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise SmsError(str(exc)) from exc

    # the gateway answers 200 OK even on failure; statusCode carries the result
    if str(data.get("statusCode")) != "200":
        raise SmsError(f"MiM SMS Error: {data.get('responseResult')}")

    logger.info("SMS sent to %s", mobile_number)
    return data
